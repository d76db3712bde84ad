"""Load and navigate an OpenAPI document.

Reads a JSON or YAML document from disk or over HTTP and extracts
paths, info and component schemas.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import httpx
import yaml

from .errors import SchemaLoadError, SchemaReferenceError

logger = logging.getLogger(__name__)

SPEC_PATH = Path(__file__).parent.parent / "spec" / "openapi.json"


def _is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def _parse(text: str, source: str) -> dict[str, Any]:
    if source.endswith((".yaml", ".yml")):
        data = yaml.safe_load(text)
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            # Served documents often lack a telling extension
            data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise SchemaLoadError(source, ValueError("document root is not a mapping"))
    return data


def load_spec(source: Path | str | None = None) -> dict[str, Any]:
    """Load the OpenAPI document from a path or URL."""
    spec_source = str(source or SPEC_PATH)
    try:
        if _is_url(spec_source):
            response = httpx.get(spec_source, follow_redirects=True, timeout=30.0)
            response.raise_for_status()
            text = response.text
        else:
            with open(spec_source, encoding="utf-8") as f:
                text = f.read()
        spec = _parse(text, spec_source)
    except SchemaLoadError:
        raise
    except (OSError, httpx.HTTPError, yaml.YAMLError, ValueError) as e:
        raise SchemaLoadError(spec_source, e) from e

    logger.info("Loaded API document from %s", spec_source)
    return spec


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the document."""
    return spec.get("paths") or {}


def get_info(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract the info section from the document."""
    return spec.get("info") or {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the document."""
    return (spec.get("components") or {}).get("schemas") or {}


def ref_name(ref: str) -> str:
    """Return the last segment of a $ref pointer, e.g. the schema name."""
    return unquote(ref.rsplit("/", 1)[-1])


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer in the document."""
    if not ref.startswith("#/"):
        raise SchemaReferenceError(ref, "only local references are supported")
    parts = ref[2:].split("/")
    node: Any = spec
    for part in parts:
        part = unquote(part).replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            raise SchemaReferenceError(ref, f"'{part}' not found")
        node = node[part]
    return node
