"""Exceptions raised while building API docs."""

from __future__ import annotations


class ApiDocsError(Exception):
    """Base exception for apidocs operations."""

    pass


class CommentParseError(ApiDocsError):
    """Raised when source text cannot be split into comment blocks."""

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.line = line


class SourceLoadError(ApiDocsError):
    """Raised when a configured source file cannot be read or parsed."""

    def __init__(self, path: str, message: str | None = None):
        super().__init__(message or f"Failed to load {path}")
        self.path = path
