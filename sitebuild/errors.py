"""Exceptions raised by sitebuild operations."""

from __future__ import annotations


class BuildError(Exception):
    """Base class for every error raised by sitebuild."""


class BuildIOError(BuildError, OSError):
    """Raised when a file or directory cannot be read, written or copied."""


class TemplateError(BuildError):
    """Raised when a template fails to compile or render."""


class StylesheetCompileError(BuildError):
    """Raised when the Sass or Less compiler rejects its input."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DependencyUnavailable(BuildError):
    """Raised when an optional compiler is not installed."""


class ManifestError(BuildError):
    """Raised when a build manifest is malformed."""
