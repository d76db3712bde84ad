"""Exceptions raised by the stub generator.

Everything derives from StubgenError so callers (and the CLI) can catch
generator failures with a single except clause.
"""

from __future__ import annotations


class StubgenError(Exception):
    """Base exception for all generator errors."""

    def __init__(self, message: str, *args):
        self.message = message
        super().__init__(message, *args)


class ConfigurationError(StubgenError):
    """The document or the generator options cannot be used for generation."""


class SchemaLoadError(StubgenError):
    """An API document could not be read from its source.

    Attributes:
        source: The path or URL that failed to load.
        cause: The underlying exception, if any.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load API document from '{source}'"
        if cause:
            message += f": {cause}"
        super().__init__(message)


class SchemaReferenceError(StubgenError):
    """A $ref pointer does not resolve inside the document."""

    def __init__(self, reference: str, reason: str | None = None):
        self.reference = reference
        self.reason = reason
        message = f"Failed to resolve reference '{reference}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class TemplateRenderError(StubgenError):
    """A template is missing or failed to render."""

    def __init__(self, template_name: str, cause: Exception | None = None):
        self.template_name = template_name
        self.cause = cause
        message = f"Failed to render template '{template_name}'"
        if cause:
            message += f": {cause}"
        super().__init__(message)
