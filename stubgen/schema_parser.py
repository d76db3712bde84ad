"""Turn OpenAPI schemas into Model and Property objects.

Handles:
- Java type mapping for primitive types and formats
- $ref resolution; refs to primitive, array and map "alias" schemas are un-aliased
- Arrays (List<T>) and additionalProperties maps (Map<String, T>)
- allOf composition (one $ref member becomes the parent)
- Inline enums
- x-enumeration / x-wrapper type overrides
- Default values
- Enumerations-first schema ordering
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .codegen_model import Model, Property
from .config import GeneratorConfig
from .errors import ConfigurationError
from .extensions import (
    X_ENUMERATION_TYPE,
    X_WRAPPER_TYPE,
    extensions_of,
    get_wrapper_type,
    get_x_enumeration_type,
    is_wrapper,
    is_x_enumeration,
)
from .loader import ref_name, resolve_ref
from .naming import getter_and_setter_capitalize, to_enum_name, to_model_name, to_var_name

JAVA_PRIMITIVES = {"String", "Boolean", "Integer", "Long", "Float", "Double", "Object", "byte[]"}

_PRIMITIVE_SCHEMA_TYPES = {"string", "integer", "number", "boolean"}

# (type, format) -> Java type; a None format is the fallback for the type.
_TYPE_MAPPING: dict[tuple[str, str | None], str] = {
    ("string", None): "String",
    ("string", "date"): "LocalDate",
    ("string", "date-time"): "OffsetDateTime",
    ("string", "byte"): "byte[]",
    ("string", "binary"): "byte[]",
    ("integer", None): "Integer",
    ("integer", "int32"): "Integer",
    ("integer", "int64"): "Long",
    ("number", None): "BigDecimal",
    ("number", "float"): "Float",
    ("number", "double"): "Double",
    ("boolean", None): "Boolean",
}


def schema_type(schema: dict[str, Any]) -> str | None:
    """The schema's type; OpenAPI 3.1 type lists are reduced to the non-null entry."""
    value = schema.get("type")
    if isinstance(value, list):
        non_null = [t for t in value if t != "null"]
        return non_null[0] if non_null else None
    return value


def is_array_schema(schema: dict[str, Any]) -> bool:
    return schema_type(schema) == "array"


def is_string_schema(schema: dict[str, Any]) -> bool:
    return schema_type(schema) == "string"


def is_map_schema(schema: dict[str, Any]) -> bool:
    additional = schema.get("additionalProperties")
    return (
        schema_type(schema) in ("object", None)
        and not schema.get("properties")
        and (isinstance(additional, dict) or additional is True)
    )


def is_alias_schema(schema: dict[str, Any]) -> bool:
    """A named schema that is only another name for a primitive type."""
    return (
        schema_type(schema) in _PRIMITIVE_SCHEMA_TYPES
        and "enum" not in schema
        and not schema.get("properties")
        and "allOf" not in schema
    )


def is_inlined_schema(schema: dict[str, Any]) -> bool:
    """A named schema whose references are replaced by the type it stands for."""
    return is_alias_schema(schema) or is_array_schema(schema) or is_map_schema(schema)


def unalias(spec: dict[str, Any], schema: dict[str, Any]) -> tuple[dict[str, Any], str | None]:
    """Follow $ref pointers; return the target schema and the last ref'd name."""
    name = None
    seen: set[str] = set()
    while "$ref" in schema:
        ref = schema["$ref"]
        if ref in seen:
            break
        seen.add(ref)
        name = ref_name(ref)
        schema = resolve_ref(spec, ref)
    return schema, name


def _number_text(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    return str(value)


def to_default_value(schema: dict[str, Any]) -> str:
    """Java literal for a schema's default value; "null" when there is none.

    Arrays always default to null, whatever the document declares.
    """
    if is_array_schema(schema):
        return "null"
    default_value = _generic_default_value(schema)
    return "null" if default_value is None else default_value


def _generic_default_value(schema: dict[str, Any]) -> str | None:
    if "default" not in schema or schema["default"] is None:
        return None
    value = schema["default"]
    type_ = schema_type(schema)
    fmt = schema.get("format")

    if type_ == "boolean":
        return "true" if value else "false"
    if type_ == "integer":
        return f"{value}l" if fmt == "int64" else str(value)
    if type_ == "number":
        if fmt == "float":
            return f"{value}f"
        if fmt == "double":
            return f"{value}d"
        return f'new BigDecimal("{value}")'
    if type_ == "string":
        if fmt in ("date", "date-time", "byte", "binary"):
            return None
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return None


def _apply_constraints(prop: Property, schema: dict[str, Any]) -> None:
    prop.minimum = _number_text(schema.get("minimum"))
    prop.maximum = _number_text(schema.get("maximum"))
    exclusive_min = schema.get("exclusiveMinimum")
    exclusive_max = schema.get("exclusiveMaximum")
    # OpenAPI 3.1 carries the bound itself, 3.0 a flag
    if isinstance(exclusive_min, bool):
        prop.exclusive_minimum = exclusive_min
    elif exclusive_min is not None:
        prop.minimum = _number_text(exclusive_min)
        prop.exclusive_minimum = True
    if isinstance(exclusive_max, bool):
        prop.exclusive_maximum = exclusive_max
    elif exclusive_max is not None:
        prop.maximum = _number_text(exclusive_max)
        prop.exclusive_maximum = True
    prop.min_length = schema.get("minLength")
    prop.max_length = schema.get("maxLength")
    prop.min_items = schema.get("minItems")
    prop.max_items = schema.get("maxItems")
    prop.pattern = schema.get("pattern")


def _set_primitive_type(prop: Property, schema: dict[str, Any]) -> None:
    type_ = schema_type(schema) or "object"
    fmt = schema.get("format")
    java_type = _TYPE_MAPPING.get((type_, fmt)) or _TYPE_MAPPING.get((type_, None)) or "Object"

    prop.openapi_type = type_
    prop.data_type = prop.datatype_with_enum = prop.base_type = java_type
    prop.is_primitive_type = java_type in JAVA_PRIMITIVES
    prop.is_string = java_type == "String"
    prop.is_integer = java_type == "Integer"
    prop.is_long = java_type == "Long"
    prop.is_float = java_type == "Float"
    prop.is_double = java_type == "Double"
    prop.is_number = java_type == "BigDecimal"
    prop.is_boolean = java_type == "Boolean"
    prop.is_date = java_type == "LocalDate"
    prop.is_date_time = java_type == "OffsetDateTime"


def _override_type(prop: Property, java_type: str) -> None:
    prop.openapi_type = java_type
    prop.data_type = prop.datatype_with_enum = prop.base_type = java_type
    prop.complex_type = java_type
    prop.is_primitive_type = False


def from_property(
    spec: dict[str, Any],
    name: str,
    schema: dict[str, Any] | None,
    config: GeneratorConfig | None = None,
    required: bool = False,
) -> Property:
    """Build a Property for one schema property."""
    schema = schema or {}
    resolved, referenced = unalias(spec, schema)

    prop = Property(name=to_var_name(name), base_name=name, required=required)
    prop.description = schema.get("description") or resolved.get("description")
    prop.vendor_extensions = {**extensions_of(resolved), **extensions_of(schema)}

    if referenced and not is_inlined_schema(resolved):
        model_name = to_model_name(referenced)
        prop.openapi_type = schema_type(resolved) or "object"
        prop.data_type = prop.datatype_with_enum = prop.base_type = model_name
        prop.complex_type = model_name
    elif is_array_schema(resolved):
        items = from_property(spec, name, resolved.get("items") or {}, config)
        prop.openapi_type = "array"
        prop.items = items
        prop.is_list_container = True
        prop.data_type = f"List<{items.data_type}>"
        prop.datatype_with_enum = f"List<{items.datatype_with_enum}>"
        prop.base_type = items.base_type
        prop.complex_type = items.complex_type
    elif is_map_schema(resolved):
        additional = resolved.get("additionalProperties")
        value = from_property(spec, name, additional if isinstance(additional, dict) else {}, config)
        prop.openapi_type = "object"
        prop.items = value
        prop.is_map_container = True
        prop.data_type = f"Map<String, {value.data_type}>"
        prop.datatype_with_enum = f"Map<String, {value.datatype_with_enum}>"
        prop.base_type = value.base_type
        prop.complex_type = value.complex_type
    else:
        _set_primitive_type(prop, resolved)
        if "enum" in resolved:
            prop.is_enum = True
            prop.allowable_values = list(resolved["enum"])
            prop.datatype_with_enum = to_enum_name(name)

    _apply_constraints(prop, {**resolved, **schema})
    prop.default_value = to_default_value({**resolved, **schema})

    if is_x_enumeration(resolved) or is_x_enumeration(schema):
        enumeration_type = get_x_enumeration_type(schema) or get_x_enumeration_type(resolved)
        if enumeration_type:
            _override_type(prop, enumeration_type)
            prop.default_value = "null"
            if is_string_schema(resolved):
                prop.is_string = False
                prop.minimum = prop.maximum = None
                prop.min_length = prop.max_length = None
    elif is_wrapper(resolved) or is_wrapper(schema):
        wrapper_type = get_wrapper_type(schema) or get_wrapper_type(resolved)
        if not wrapper_type and referenced:
            wrapper_type = to_model_name(referenced)
        if wrapper_type:
            _override_type(prop, wrapper_type)
            prop.default_value = "null"

    accessor = getter_and_setter_capitalize(name)
    # Client proxies use get-prefixed Boolean getters
    boolean_prefix = "get" if config is not None and config.is_client else "is"
    prop.getter = (boolean_prefix if prop.is_boolean else "get") + accessor
    prop.setter = "set" + accessor
    return prop


def _collect_properties(
    spec: dict[str, Any], schema: dict[str, Any]
) -> tuple[dict[str, Any], set[str], str | None]:
    """Own properties, required names and parent schema name of a model schema."""
    properties: dict[str, Any] = {}
    required: set[str] = set(schema.get("required") or [])
    parent_name = None

    members = schema.get("allOf") or []
    refs = [m for m in members if "$ref" in m]
    if len(refs) == 1:
        parent_name = ref_name(refs[0]["$ref"])

    for member in members:
        if "$ref" in member:
            if parent_name is not None:
                continue
            member = resolve_ref(spec, member["$ref"])
        properties.update(member.get("properties") or {})
        required.update(member.get("required") or [])

    properties.update(schema.get("properties") or {})
    return properties, required, parent_name


def _add_type_imports(model: Model, prop: Property, import_mapping: dict[str, str]) -> None:
    symbols = {prop.base_type}
    if prop.is_list_container:
        symbols.add("List")
    if prop.is_map_container:
        symbols.add("Map")
    for symbol in symbols:
        if symbol in import_mapping:
            model.imports.add(symbol)


def from_model(
    spec: dict[str, Any],
    name: str,
    schema: dict[str, Any],
    config: GeneratorConfig,
) -> Model:
    """Build a Model for a component schema.

    x-enumeration and x-wrapper schemas get their Java type written back
    into the schema so later properties referencing them resolve to it.
    """
    model_name = to_model_name(name)
    model = Model(name=model_name, schema_name=name, class_filename=model_name)
    model.description = schema.get("description")

    if is_x_enumeration(schema) and not get_x_enumeration_type(schema):
        schema[X_ENUMERATION_TYPE] = model_name
    if is_wrapper(schema) and not get_wrapper_type(schema):
        schema[X_WRAPPER_TYPE] = model_name
    model.vendor_extensions = extensions_of(schema)

    if "enum" in schema:
        model.is_enum = True
        model.allowable_values = list(schema["enum"])
        plain_schema = {k: v for k, v in schema.items() if k != "enum" and not k.startswith("x-")}
        model.data_type = from_property(spec, name, plain_schema, config).data_type
    elif is_inlined_schema(schema):
        model.is_alias = True
        alias_schema = {k: v for k, v in schema.items() if not k.startswith("x-")}
        model.data_type = from_property(spec, name, alias_schema, config).data_type

    properties, required, parent_name = _collect_properties(spec, schema)
    model.parent_name = to_model_name(parent_name) if parent_name else None

    for prop_name, prop_schema in properties.items():
        prop = from_property(spec, prop_name, prop_schema, config, required=prop_name in required)
        model.vars.append(prop)
        _add_type_imports(model, prop, config.import_mapping)

    return model


def reorder_schemas(
    schemas: Mapping[str, dict[str, Any]] | Iterable[tuple[str, dict[str, Any]]],
) -> dict[str, dict[str, Any]]:
    """Move x-enumeration schemas in front of all others, keeping relative order.

    Properties referencing an x-enumeration resolve to its Java type only
    once the enumeration itself has been converted.
    """
    entries = schemas.items() if isinstance(schemas, Mapping) else schemas
    enumerations: list[tuple[str, dict[str, Any]]] = []
    others: list[tuple[str, dict[str, Any]]] = []
    seen: set[str] = set()

    for name, schema in entries:
        if name in seen:
            raise ConfigurationError(f"Duplicate schema name '{name}' in document components")
        seen.add(name)
        (enumerations if is_x_enumeration(schema) else others).append((name, schema))

    return dict(enumerations + others)
