"""Failures a tool handler can run into.

Every one of these is caught at the handler boundary by
`utils.envelope.tool_handler` and turned into an error envelope; `status`
drives the remediation hint that gets appended to the message.
"""
from typing import Any, Optional


class WordPressToolError(Exception):
    """Base class; carries the HTTP status and body when there is one."""

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body

    def __str__(self) -> str:
        return self.message


class ValidationError(WordPressToolError):
    """A parameter was missing or invalid; raised before any request is made."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid parameter '{field}': {reason}")
        self.field = field
        self.reason = reason

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        # report the first offending field, pydantic lists them in order
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "arguments"
        return cls(field, first.get("msg", "invalid value"))


class TransportError(WordPressToolError):
    """Network, DNS or timeout failure; no HTTP status is available."""


class UpstreamError(WordPressToolError):
    """The REST API answered with a non-2xx status."""

    def __init__(self, status: int, body: Any = None):
        super().__init__(f"Request failed with status code {status}", status=status, body=body)


class MissingFieldError(WordPressToolError):
    """A successful response did not include a field the tool depends on."""

    def __init__(self, field: str, body: Any = None):
        super().__init__(f"Response did not include the '{field}' field", body=body)
        self.field = field


class ConfigurationError(WordPressToolError):
    """Required configuration (site URL, credentials) is absent."""
