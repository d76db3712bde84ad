"""Turn document operations into Operation objects and decorate them.

from_operation does the generic conversion (parameters by location, the
JSON request body, responses, return type, operation id).
post_process_operation flags operations with several 2xx responses, and
post_process_operations collects the imports an API class needs for its
parameter validation annotations.
"""

from __future__ import annotations

import logging
from typing import Any

from .codegen_model import Operation, Parameter, Response
from .config import GeneratorConfig, NamingStrategy
from .extensions import extensions_of
from .loader import ref_name, resolve_ref
from .naming import camelize, generate_operation_id, sanitize_name, to_var_name
from .schema_parser import from_property

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

HAS_MULTIPLE_2XX_RETURN_CODES = "hasMultiple2xxReturnCodes"

_JSON_CONTENT_TYPES = ("application/json", "text/json", "application/*+json", "*/*")


def _resolve(spec: dict[str, Any], obj: dict[str, Any]) -> dict[str, Any]:
    return resolve_ref(spec, obj["$ref"]) if "$ref" in obj else obj


def _json_schema(content: dict[str, Any]) -> dict[str, Any] | None:
    for content_type in _JSON_CONTENT_TYPES:
        if content_type in content:
            return content[content_type].get("schema")
    for media in content.values():
        if isinstance(media, dict) and media.get("schema"):
            return media["schema"]
    return None


def from_parameter(spec: dict[str, Any], param: dict[str, Any], config: GeneratorConfig) -> Parameter | None:
    """Convert a path/query/header parameter; cookie parameters are not supported."""
    param = _resolve(spec, param)
    location = param.get("in", "query")
    if location not in ("path", "query", "header"):
        return None

    name = param["name"]
    required = bool(param.get("required", location == "path"))
    prop = from_property(spec, name, param.get("schema") or {}, config, required=required)

    return Parameter(
        base_name=name,
        param_name=to_var_name(name),
        location=location,
        data_type=prop.datatype_with_enum if prop.is_enum else prop.data_type,
        description=param.get("description") or prop.description,
        default_value=None if prop.default_value == "null" else prop.default_value,
        required=required,
        is_enum=prop.is_enum,
        is_integer=prop.is_integer,
        is_long=prop.is_long,
        is_list_container=prop.is_list_container,
        allowable_values=prop.allowable_values,
        minimum=prop.minimum,
        maximum=prop.maximum,
        min_length=prop.min_length,
        max_length=prop.max_length,
        min_items=prop.min_items,
        max_items=prop.max_items,
        pattern=prop.pattern,
        vendor_extensions={**prop.vendor_extensions, **extensions_of(param)},
    )


def from_request_body(spec: dict[str, Any], request_body: dict[str, Any], config: GeneratorConfig) -> Parameter | None:
    """Convert the request body into a single body parameter."""
    request_body = _resolve(spec, request_body)
    schema = _json_schema(request_body.get("content") or {})
    if schema is None:
        return None

    name = ref_name(schema["$ref"]) if "$ref" in schema else "body"
    prop = from_property(spec, name, schema, config, required=True)
    return Parameter(
        base_name=name,
        param_name=to_var_name(name),
        location="body",
        data_type=prop.data_type,
        description=request_body.get("description") or prop.description,
        required=bool(request_body.get("required", False)),
        is_list_container=prop.is_list_container,
        min_items=prop.min_items,
        max_items=prop.max_items,
        vendor_extensions=extensions_of(request_body),
    )


def from_response(spec: dict[str, Any], code: Any, response: dict[str, Any], config: GeneratorConfig) -> Response:
    response = _resolve(spec, response or {})
    schema = _json_schema(response.get("content") or {})
    data_type = from_property(spec, "response", schema, config).data_type if schema else None
    return Response(code=str(code), message=response.get("description"), data_type=data_type)


def operation_id_for(method: str, path: str, operation: dict[str, Any], config: GeneratorConfig) -> str:
    declared = operation.get("operationId")
    if config.operation_naming is NamingStrategy.PATH or not declared:
        return generate_operation_id(method, path)
    return camelize(sanitize_name(declared), lower_first=True)


def from_operation(
    spec: dict[str, Any],
    path: str,
    method: str,
    operation: dict[str, Any],
    config: GeneratorConfig,
    path_parameters: list[dict[str, Any]] | None = None,
) -> Operation:
    """Build an Operation from one method entry of a path item."""
    op = Operation(
        operation_id=operation_id_for(method, path, operation, config),
        http_method=method.upper(),
        path=path,
        tags=list(operation.get("tags") or []),
        summary=operation.get("summary"),
        notes=operation.get("description"),
        vendor_extensions=extensions_of(operation),
    )

    # Operation-level parameters override path-level ones with the same name and location
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for raw in list(path_parameters or []) + list(operation.get("parameters") or []):
        resolved = _resolve(spec, raw)
        merged[(resolved.get("name", ""), resolved.get("in", "query"))] = resolved

    for raw in merged.values():
        param = from_parameter(spec, raw, config)
        if param is None:
            logger.debug("Skipping unsupported parameter %s in %s", raw.get("name"), op.operation_id)
            continue
        getattr(op, f"{param.location}_params").append(param)

    if operation.get("requestBody"):
        body = from_request_body(spec, operation["requestBody"], config)
        if body is not None:
            op.body_params.append(body)

    for code, response in (operation.get("responses") or {}).items():
        op.responses.append(from_response(spec, code, response, config))

    op.return_type = next((r.data_type for r in op.responses if r.is_2xx and r.data_type), None)
    return op


def post_process_operation(op: Operation) -> Operation:
    """Flag operations that declare more than one distinct 2xx status code."""
    success_codes: set[int] = set()
    for response in op.responses:
        code = response.status_code
        if code is None:
            logger.debug("Skipping non-numeric status code: %s", response.code)
            continue
        if code // 100 == 2:
            success_codes.add(code)
    op.vendor_extensions[HAS_MULTIPLE_2XX_RETURN_CODES] = len(success_codes) > 1
    return op


def has_import(import_class: str, imports: list[dict[str, str]]) -> bool:
    return any(import_class in entry.values() for entry in imports)


def add_import(name: str, imports: list[dict[str, str]], import_mapping: dict[str, str]) -> None:
    """Append the class mapped to a symbol, unless it is unmapped or already there."""
    import_class = import_mapping.get(name)
    if import_class is not None and not has_import(import_class, imports):
        imports.append({"import": import_class})


def imports_for_param_validation(
    params: list[Parameter], imports: list[dict[str, str]], import_mapping: dict[str, str]
) -> None:
    for param in params:
        if param.is_enum:
            add_import("JsonValue", imports, import_mapping)

        if param.pattern is not None:
            add_import("Pattern", imports, import_mapping)

        is_int = param.is_integer or param.is_long
        if param.minimum is not None:
            add_import("Min" if is_int else "DecimalMin", imports, import_mapping)
        if param.maximum is not None:
            add_import("Max" if is_int else "DecimalMax", imports, import_mapping)

        if param.required and not param.is_body_param:
            add_import("NotNull", imports, import_mapping)

        if any(v is not None for v in (param.min_length, param.max_length, param.min_items, param.max_items)):
            add_import("Size", imports, import_mapping)

        if param.is_body_param:
            add_import("Valid", imports, import_mapping)
            add_import("NotNull", imports, import_mapping)


def _type_symbols(data_type: str | None) -> list[str]:
    if not data_type:
        return []
    return [s.strip() for s in data_type.replace("<", ",").replace(">", ",").split(",") if s.strip()]


def post_process_operations(operations: list[Operation], config: GeneratorConfig) -> list[dict[str, str]]:
    """Collect the imports for one API class, deduplicated by imported class."""
    imports: list[dict[str, str]] = []
    mapping = config.import_mapping
    for op in operations:
        logger.info("Found: %s %s (%s)", op.http_method, op.path, op.operation_id)

        if config.is_jax_rs:
            add_import(op.http_method.upper(), imports, mapping)

        for symbol in _type_symbols(op.return_type):
            add_import(symbol, imports, mapping)
        for param in op.all_params:
            for symbol in _type_symbols(param.data_type):
                add_import(symbol, imports, mapping)

        imports_for_param_validation(op.path_params, imports, mapping)
        imports_for_param_validation(op.query_params, imports, mapping)
        imports_for_param_validation(op.header_params, imports, mapping)
        imports_for_param_validation(op.body_params, imports, mapping)
    return imports
