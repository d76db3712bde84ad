"""Build the Jinja2 template context from a parsed OpenAPI document.

Runs the generation pipeline in a fixed order:

  1. short app name            (document level, once)
  2. schema reordering         (x-enumerations first)
  3. models                    (schema_parser.from_model, then model_decorator)
  4. inheritance links
  5. operations                (from_operation, post_process_operation, grouping per tag)
  6. per-group import lists    (post_process_operations)

and assembles the context dict the templates render from.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .codegen_model import Model, Operation
from .config import GeneratorConfig
from .grouping import GroupingStrategy, add_operation_to_group
from .loader import get_info, get_paths, get_schemas
from .model_decorator import post_process_all_models, post_process_model
from .naming import to_api_name
from .operations import (
    HTTP_METHODS,
    from_operation,
    post_process_operation,
    post_process_operations,
)
from .schema_parser import from_model, reorder_schemas
from .short_name import extract_short_app_name

logger = logging.getLogger(__name__)

DEFAULT_TAG = "default"


def build_models(spec: dict[str, Any], config: GeneratorConfig) -> dict[str, Model]:
    """Convert and decorate every component schema, keyed by schema name."""
    schemas = reorder_schemas(get_schemas(spec))
    models: dict[str, Model] = {}
    for name, schema in schemas.items():
        model = from_model(spec, name, schema, config)
        models[name] = post_process_model(model, config)
    return post_process_all_models(models)


def build_operation_groups(
    spec: dict[str, Any], config: GeneratorConfig
) -> dict[str, list[Operation]]:
    """Convert every operation and assign it to its group."""
    strategy = GroupingStrategy.from_value(config.grouping, config.flavor)
    groups: dict[str, list[Operation]] = {}

    for path, path_item in get_paths(spec).items():
        if not isinstance(path_item, dict):
            continue
        path_parameters = path_item.get("parameters") or []
        for method in HTTP_METHODS:
            if method not in path_item:
                continue
            op = from_operation(spec, path, method, path_item[method], config, path_parameters)
            post_process_operation(op)
            for tag in op.tags or [DEFAULT_TAG]:
                add_operation_to_group(strategy, tag, path, op, groups)

    return groups


def _model_imports(model: Model, config: GeneratorConfig) -> list[str]:
    return sorted({config.import_mapping[s] for s in model.imports if s in config.import_mapping})


def build_context(spec: dict[str, Any], config: GeneratorConfig) -> dict[str, Any]:
    """Build the full template context from the OpenAPI document."""
    short_app_name = extract_short_app_name(config.additional_properties, spec)
    # Captured before model conversion writes type names back into the schemas
    full_swagger = json.dumps(spec, indent=2, default=str)

    models = build_models(spec, config)
    groups = build_operation_groups(spec, config)

    apis: list[dict[str, Any]] = []
    for group_name, operations in groups.items():
        if config.is_client and len(groups) > 1:
            # One proxy per group; they cannot all share the app name
            classname = to_api_name(group_name) + "Client"
        else:
            classname = to_api_name(group_name, short_app_name, client=config.is_client)
        apis.append({
            "group": group_name,
            "classname": classname,
            "operations": operations,
            "imports": post_process_operations(operations, config),
        })

    model_contexts = [
        {"model": model, "imports": _model_imports(model, config)}
        for model in models.values()
        if not model.is_alias
    ]

    info = get_info(spec)
    logger.info(
        "Prepared %d API classes and %d models for %s",
        len(apis), len(model_contexts), short_app_name,
    )

    return {
        **config.additional_properties,
        "apis": apis,
        "models": model_contexts,
        "api_count": len(apis),
        "operation_count": sum(len(api["operations"]) for api in apis),
        "short_app_name": short_app_name,
        "api_package": config.api_package,
        "model_package": config.model_package,
        "library": config.library,
        "jaxrs": config.is_jax_rs,
        "spring": not config.is_jax_rs,
        "client": config.is_client,
        "generate_json_annotations": config.generate_json_annotations,
        "generate_xml_annotations": config.generate_xml_annotations,
        "app_version": info.get("version", "unknown"),
        "app_description": info.get("description"),
        "base_path": _base_path(spec),
        "swaggerFileApplication": True,
        "fullSwagger": full_swagger,
    }


def _base_path(spec: dict[str, Any]) -> str:
    servers = spec.get("servers") or []
    if servers and isinstance(servers[0], dict):
        url = servers[0].get("url", "")
        if "://" in url:
            url = "/" + url.split("://", 1)[1].partition("/")[2]
        return url.rstrip("/") or "/"
    return "/"
