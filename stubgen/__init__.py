"""OpenAPI to Java stub generator."""

__version__ = "0.1.0"
