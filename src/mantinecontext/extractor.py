"""Heuristic extraction of component documentation from rendered mantine.dev pages.

Pure business logic: receives rendered HTML, returns a ComponentDoc. No I/O.

Steps (order matters):
  1. Canonicalise the component name; derive the page URL from it
  2. Description: first paragraph after the page title
  3. Props: rows of the props table with at least four cells
  4. Examples: every code block, titled by the heading of its section
  5. Import statement: from the first example, else synthesised
  6. Package name: from the import statement
  7. Related components: links to sibling /core/<slug> pages
  8. Stamp version, url, last_fetched_at

The markup of mantine.dev is not a stable contract; every selector list below
is tried in order and the first one that matches anything wins.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import structlog
from bs4 import BeautifulSoup, Tag

from mantinecontext.models.docs import ComponentDoc, ExampleEntry, PropEntry

if TYPE_CHECKING:
    from collections.abc import Iterable

log = structlog.get_logger()

CORE_PACKAGE = "@mantine/core"
REQUIRED_MARKER = "*"

_TITLE_SELECTORS = (".mantine-Title-root", "h1")
_PROPS_ROW_SELECTORS = (".mantine-Table-root tbody tr", "table tbody tr")
_CODE_BLOCK_SELECTORS = (".mantine-Code-root", "pre")
_EXAMPLE_HEADINGS = frozenset({"h2", "h3"})

# Walk at most this many ancestors looking for the section heading of a code block
_MAX_SECTION_DEPTH = 3

_IMPORT_RE = re.compile(r"""import\s+\{\s*[^}]*\}\s+from\s+['"]@mantine/[^'"]+['"]""")
_PACKAGE_RE = re.compile(r"@mantine/([a-z-]+)")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_component_name(raw: str) -> str:
    """Canonicalise a component name to a single leading capital.

    ``"button"`` → ``"Button"``, ``"text-input"`` → ``"TextInput"``,
    ``"TextInput"`` is returned unchanged.
    """
    name = raw.strip()
    if "-" in name:
        return "".join(part[:1].upper() + part[1:] for part in name.split("-") if part)
    return name[:1].upper() + name[1:]


def component_slug(name: str) -> str:
    """URL path segment for a canonical name: ``"TextInput"`` → ``"text-input"``."""
    return _CAMEL_BOUNDARY_RE.sub("-", name).lower()


def name_from_slug(slug: str) -> str:
    """Display name for a URL path segment: ``"action-icon"`` → ``"ActionIcon"``."""
    return normalize_component_name(slug)


def component_url(base_url: str, name: str) -> str:
    return f"{base_url.rstrip('/')}/core/{component_slug(name)}"


def core_segment(href: str, base_host: str) -> str | None:
    """Return ``<slug>`` if ``href`` is a same-site ``/core/<slug>`` link, else None."""
    parsed = urlparse(href)
    if parsed.netloc and parsed.netloc != base_host:
        return None
    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) != 2 or parts[0] != "core":
        return None
    return parts[1]


def _select_first(soup: BeautifulSoup, selectors: Iterable[str]) -> list[Tag]:
    for selector in selectors:
        found = soup.select(selector)
        if found:
            return found
    return []


def _cell_text(tag: Tag) -> str:
    return tag.get_text(" ", strip=True)


class MantineExtractor:
    """Extraction strategy for mantine.dev component pages."""

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")
        self._base_host = urlparse(self._base_url).netloc

    def extract(self, html: str, component_name: str, *, version: str) -> ComponentDoc:
        name = normalize_component_name(component_name)
        url = component_url(self._base_url, name)
        soup = BeautifulSoup(html, "html.parser")

        examples = self._examples(soup)
        import_statement = self._import_statement(examples, name)

        doc = ComponentDoc(
            name=name,
            description=self._description(soup),
            props=self._props(soup),
            examples=examples,
            import_statement=import_statement,
            package_name=self._package_name(import_statement),
            version=version,
            url=url,
            related_components=self._related(soup, component_slug(name)),
            last_fetched_at=datetime.now(UTC),
        )
        log.debug(
            "extract_complete",
            component=name,
            props=len(doc.props),
            examples=len(doc.examples),
            related=len(doc.related_components),
        )
        return doc

    # ------------------------------------------------------------------
    # Individual heuristics
    # ------------------------------------------------------------------

    def _description(self, soup: BeautifulSoup) -> str:
        titles = _select_first(soup, _TITLE_SELECTORS)
        if not titles:
            return ""
        paragraph = titles[0].find_next_sibling("p")
        return paragraph.get_text(strip=True) if paragraph is not None else ""

    def _props(self, soup: BeautifulSoup) -> list[PropEntry]:
        props: list[PropEntry] = []
        for row in _select_first(soup, _PROPS_ROW_SELECTORS):
            cells = row.find_all("td")
            if len(cells) < 4:
                continue
            raw_name = _cell_text(cells[0])
            props.append(
                PropEntry(
                    name=raw_name.replace(REQUIRED_MARKER, "").strip(),
                    type=_cell_text(cells[1]),
                    default_value=_cell_text(cells[2]) or None,
                    description=_cell_text(cells[3]),
                    required=REQUIRED_MARKER in raw_name,
                )
            )
        return props

    def _examples(self, soup: BeautifulSoup) -> list[ExampleEntry]:
        examples: list[ExampleEntry] = []
        for position, block in enumerate(_select_first(soup, _CODE_BLOCK_SELECTORS), start=1):
            heading, paragraph = _section_context(block)
            examples.append(
                ExampleEntry(
                    title=heading or f"Example {position}",
                    code=block.get_text().strip(),
                    description=paragraph,
                )
            )
        return examples

    def _import_statement(self, examples: list[ExampleEntry], name: str) -> str:
        if examples:
            match = _IMPORT_RE.search(examples[0].code)
            if match:
                return match.group(0)
        return f"import {{ {name} }} from '{CORE_PACKAGE}'"

    def _package_name(self, import_statement: str) -> str:
        match = _PACKAGE_RE.search(import_statement)
        return f"@mantine/{match.group(1)}" if match else CORE_PACKAGE

    def _related(self, soup: BeautifulSoup, own_slug: str) -> list[str]:
        related: list[str] = []
        for anchor in soup.select("a[href]"):
            href = anchor.get("href")
            if not isinstance(href, str):
                continue
            slug = core_segment(href, self._base_host)
            if slug is None or slug.lower() == own_slug:
                continue
            related.append(name_from_slug(slug))
        # ComponentDoc drops duplicates and self-references
        return related


def _section_context(block: Tag) -> tuple[str | None, str | None]:
    """Return (heading text, paragraph text) of the section a code block belongs to.

    Scans preceding siblings backwards, climbing a few ancestor levels for
    wrapped blocks. The heading is the first h2/h3 met; the paragraph is the
    first <p> met before that heading.
    """
    paragraph: str | None = None
    node: Tag | None = block
    for _ in range(_MAX_SECTION_DEPTH + 1):
        if node is None:
            break
        for sibling in node.find_previous_siblings():
            if sibling.name in _EXAMPLE_HEADINGS:
                text = sibling.get_text(strip=True)
                return (text or None), paragraph
            if sibling.name == "p" and paragraph is None:
                paragraph = sibling.get_text(strip=True) or None
        parent = node.parent
        node = parent if isinstance(parent, Tag) and parent.name not in ("body", "[document]") else None
    return None, paragraph
