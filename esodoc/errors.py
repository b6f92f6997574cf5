"""
Exception types raised while converting the API documentation.

Parse-time and render-time failures are fatal: they propagate up and abort
the whole conversion. Unrecognized but non-essential input is only logged.
"""

from typing import Optional


class EsoDocError(Exception):
    """Base class for all esodoc failures."""


class DocumentationParseError(EsoDocError, ValueError):
    """A line did not match the shape its section expects."""

    def __init__(self, line: str, reason: str, line_number: Optional[int] = None):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        super().__init__(self._format())

    def _format(self) -> str:
        location = f" (line {self.line_number})" if self.line_number else ""
        return f"{self.reason}{location}: {self.line!r}"


class MissingEntityError(EsoDocError, LookupError):
    """A required entity (root element, shared attribute) does not exist."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Missing {kind}: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class ConfigurationError(EsoDocError):
    """The schema configuration file could not be loaded."""
