"""Typed access to the vendor extensions the generator understands.

Vendor extensions stay an open string-keyed mapping so unknown keys pass
through to templates untouched; the helpers here give the known ones a
typed call site. A missing extension is never an error.
"""

from __future__ import annotations

from typing import Any

# Marks a string schema as an enumeration without compile-time
# dependency on the full value set.
X_ENUMERATION = "x-enumeration"
# Java type of an x-enumeration, filled in by the generator itself.
X_ENUMERATION_TYPE = "x-enumeration-type"
# Marks a primitive schema that gets its own single-field class.
X_WRAPPER = "x-wrapper"
X_WRAPPER_TYPE = "x-wrapper-type"
X_CLIENT_GROUP = "x-client-group"
X_SHORT_NAME = "x-short-name"
X_USE_OFFSET_DATE_TIME = "x-use-offset-date-time"


def extensions_of(obj: Any) -> dict[str, Any]:
    """Return the vendor extension mapping of a raw schema or a codegen object.

    Raw schemas carry their extensions inline as ``x-`` keys; codegen
    objects carry a ``vendor_extensions`` dict.
    """
    if obj is None:
        return {}
    if isinstance(obj, dict):
        return {k: v for k, v in obj.items() if isinstance(k, str) and k.startswith("x-")}
    return getattr(obj, "vendor_extensions", None) or {}


def get_extension(name: str, obj: Any) -> Any | None:
    """Return the value of a vendor extension, or None when absent."""
    return extensions_of(obj).get(name)


def has_extension(name: str, obj: Any) -> bool:
    return name in extensions_of(obj)


def is_x_enumeration(obj: Any) -> bool:
    return has_extension(X_ENUMERATION, obj)


def get_x_enumeration_type(obj: Any) -> str | None:
    value = get_extension(X_ENUMERATION_TYPE, obj)
    return value if isinstance(value, str) else None


def is_wrapper(obj: Any) -> bool:
    return has_extension(X_WRAPPER, obj)


def get_wrapper_type(obj: Any) -> str | None:
    value = get_extension(X_WRAPPER_TYPE, obj)
    return value if isinstance(value, str) else None


def get_client_group(obj: Any) -> str | None:
    value = get_extension(X_CLIENT_GROUP, obj)
    return str(value) if value is not None else None
