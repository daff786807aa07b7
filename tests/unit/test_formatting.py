"""Unit tests for section selection and Markdown rendering."""

from __future__ import annotations

from mantinecontext.formatting import render_markdown, select_section
from mantinecontext.models.docs import ComponentDoc, PropEntry


class TestSelectSection:
    def test_all_is_unchanged(self, sample_doc: ComponentDoc) -> None:
        assert select_section(sample_doc, "all") == sample_doc

    def test_props(self, sample_doc: ComponentDoc) -> None:
        doc = select_section(sample_doc, "props")
        assert doc.props == sample_doc.props
        assert doc.examples == []
        assert doc.related_components == []

    def test_examples(self, sample_doc: ComponentDoc) -> None:
        doc = select_section(sample_doc, "examples")
        assert doc.examples == sample_doc.examples
        assert doc.props == []

    def test_api(self, sample_doc: ComponentDoc) -> None:
        doc = select_section(sample_doc, "api")
        assert doc.props == []
        assert doc.examples == []
        assert doc.import_statement == sample_doc.import_statement
        assert doc.related_components == ["ActionIcon"]

    def test_input_not_mutated(self, sample_doc: ComponentDoc) -> None:
        select_section(sample_doc, "api")
        assert len(sample_doc.props) == 1


class TestRenderMarkdown:
    def test_all_sections(self, sample_doc: ComponentDoc) -> None:
        md = render_markdown(sample_doc)

        assert md.startswith("# Button\n")
        assert "## Overview" in md
        assert "```typescript\nimport { Button } from '@mantine/core'\n```" in md
        assert "- ActionIcon" in md
        assert "| onClick | `() => void` | - | Click handler | No |" in md
        assert "### Usage" in md
        assert "```tsx\n<Button>Button</Button>\n```" in md

    def test_props_only(self, sample_doc: ComponentDoc) -> None:
        md = render_markdown(sample_doc, "props")

        assert "## Props" in md
        assert "## Overview" not in md
        assert "## Examples" not in md

    def test_empty_sections(self, sample_doc: ComponentDoc) -> None:
        doc = sample_doc.model_copy(update={"props": [], "examples": []})
        md = render_markdown(doc)

        assert "No props documentation available." in md
        assert "No examples available." in md

    def test_pipes_escaped_in_cells(self, sample_doc: ComponentDoc) -> None:
        prop = PropEntry(name="size", type="'sm' | 'md'", default_value="'sm'", required=True)
        md = render_markdown(sample_doc.model_copy(update={"props": [prop]}), "props")

        assert "`'sm' \\| 'md'`" in md
        assert "| Yes |" in md
