from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    COMPONENT_FETCH_FAILED = "COMPONENT_FETCH_FAILED"
    INVALID_INPUT = "INVALID_INPUT"


class MantineContextError(Exception):
    """Raised by tool handlers for all expected failure conditions.

    Caught by server.py and serialised into the MCP error response.
    Do not catch this inside business logic; let it propagate to the
    MCP layer so the agent receives a structured error with a suggestion.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class FetchFailure(MantineContextError):
    """The documentation page for a component could not be rendered.

    Always raised ``from`` the underlying cause. Never cached.
    """

    def __init__(self, component_name: str, cause: BaseException | str) -> None:
        super().__init__(
            code=ErrorCode.COMPONENT_FETCH_FAILED,
            message=f"Failed to fetch documentation for {component_name}: {cause}",
            suggestion=(
                "Check the component name with search_components or list_components. "
                "mantine.dev may also be temporarily unavailable."
            ),
            recoverable=True,
        )
        self.component_name = component_name
        self.cause = cause


class RenderError(Exception):
    """Navigation or browser launch failed for a URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Could not render {url}: {reason}")
        self.url = url
        self.reason = reason
