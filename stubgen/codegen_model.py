"""Objects handed to the templates.

One instance per document operation, parameter, response, schema and
schema property. They live for a single generation run; the pipeline
steps fill in their derived fields in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .naming import to_enum_constant


@dataclass
class Property:
    """A property of a model (or the item type of a list property)."""

    name: str
    base_name: str
    openapi_type: str | None = None
    data_type: str = "Object"
    datatype_with_enum: str = "Object"
    base_type: str = "Object"
    complex_type: str | None = None
    default_value: str = "null"
    description: str | None = None
    getter: str = ""
    setter: str = ""
    required: bool = False
    is_primitive_type: bool = False
    is_string: bool = False
    is_integer: bool = False
    is_long: bool = False
    is_float: bool = False
    is_double: bool = False
    is_number: bool = False
    is_boolean: bool = False
    is_date: bool = False
    is_date_time: bool = False
    is_enum: bool = False
    is_list_container: bool = False
    is_map_container: bool = False
    items: Property | None = None
    allowable_values: list[Any] = field(default_factory=list)
    minimum: str | None = None
    maximum: str | None = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    min_length: int | None = None
    max_length: int | None = None
    min_items: int | None = None
    max_items: int | None = None
    pattern: str | None = None
    vendor_extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def enum_constants(self) -> list[dict[str, Any]]:
        return [{"name": to_enum_constant(v), "value": v} for v in self.allowable_values]


@dataclass
class Model:
    """A named schema that becomes one generated type."""

    name: str
    schema_name: str
    class_filename: str
    data_type: str | None = None
    description: str | None = None
    vars: list[Property] = field(default_factory=list)
    imports: set[str] = field(default_factory=set)
    vendor_extensions: dict[str, Any] = field(default_factory=dict)
    is_enum: bool = False
    is_alias: bool = False
    allowable_values: list[Any] = field(default_factory=list)
    parent_name: str | None = None
    parent: Model | None = None
    children: list[Model] = field(default_factory=list)

    @property
    def enum_constants(self) -> list[dict[str, Any]]:
        return [{"name": to_enum_constant(v), "value": v} for v in self.allowable_values]


@dataclass
class Parameter:
    """An operation parameter (path, query, header or body)."""

    base_name: str
    param_name: str
    location: str
    data_type: str = "Object"
    description: str | None = None
    default_value: str | None = None
    required: bool = False
    is_enum: bool = False
    is_integer: bool = False
    is_long: bool = False
    is_list_container: bool = False
    allowable_values: list[Any] = field(default_factory=list)
    minimum: str | None = None
    maximum: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    min_items: int | None = None
    max_items: int | None = None
    pattern: str | None = None
    vendor_extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def is_path_param(self) -> bool:
        return self.location == "path"

    @property
    def is_query_param(self) -> bool:
        return self.location == "query"

    @property
    def is_header_param(self) -> bool:
        return self.location == "header"

    @property
    def is_body_param(self) -> bool:
        return self.location == "body"


@dataclass
class Response:
    code: str
    message: str | None = None
    data_type: str | None = None

    @property
    def status_code(self) -> int | None:
        """Numeric status, or None for ``default`` and range codes like ``2XX``."""
        return int(self.code) if self.code.isdigit() else None

    @property
    def is_2xx(self) -> bool:
        code = self.status_code
        return code is not None and code // 100 == 2


@dataclass
class Operation:
    """One method + path combination."""

    operation_id: str
    http_method: str
    path: str
    tags: list[str] = field(default_factory=list)
    summary: str | None = None
    notes: str | None = None
    return_type: str | None = None
    path_params: list[Parameter] = field(default_factory=list)
    query_params: list[Parameter] = field(default_factory=list)
    header_params: list[Parameter] = field(default_factory=list)
    body_params: list[Parameter] = field(default_factory=list)
    responses: list[Response] = field(default_factory=list)
    vendor_extensions: dict[str, Any] = field(default_factory=dict)
    # Derived by grouping
    base_name: str | None = None
    subresource_operation: bool = False

    @property
    def all_params(self) -> list[Parameter]:
        return self.path_params + self.query_params + self.header_params + self.body_params
