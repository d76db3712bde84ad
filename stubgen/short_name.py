"""Derive the application's short name.

The first string found wins:

  1. the ``serviceName`` generator option
  2. ``x-short-name`` in the document's info section
  3. the document's title

A ``serviceName`` that is set but not a string (the option is declared as
a flag, so ``true`` is a valid value) skips ``x-short-name`` and falls
through to the title.

The value is camelized into the service endpoint name and capitalized
into the short app name; both are stored as generator options.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import SERVICE_ENDPOINT_NAME, SERVICE_NAME, SHORT_APP_NAME
from .errors import ConfigurationError
from .extensions import X_SHORT_NAME, get_extension
from .loader import get_info
from .naming import camelize_spaced_string, capitalize

logger = logging.getLogger(__name__)


def _raw_short_name(additional_properties: dict[str, Any], spec: dict[str, Any]) -> str:
    info = get_info(spec)
    service_name = additional_properties.get(SERVICE_NAME)
    candidates = [
        (SERVICE_NAME, service_name),
        (X_SHORT_NAME, get_extension(X_SHORT_NAME, info)),
        ("title", info.get("title")),
    ]
    if service_name is not None and not isinstance(service_name, str):
        logger.debug("Ignoring non-string %s %r", SERVICE_NAME, service_name)
        candidates = candidates[2:]
    for source, value in candidates:
        if isinstance(value, str) and value.strip():
            logger.debug("Short app name taken from %s: %r", source, value)
            return value
    raise ConfigurationError(
        "Cannot derive an application name: the document has no info.title "
        f"and neither '{SERVICE_NAME}' nor '{X_SHORT_NAME}' is set"
    )


def extract_short_app_name(additional_properties: dict[str, Any], spec: dict[str, Any]) -> str:
    """Resolve the short app name and record it in the generator options."""
    service_endpoint_name = camelize_spaced_string(_raw_short_name(additional_properties, spec))
    if not service_endpoint_name:
        raise ConfigurationError("The application name contains no letters")

    short_app_name = capitalize(service_endpoint_name)
    additional_properties[SHORT_APP_NAME] = short_app_name
    additional_properties[SERVICE_ENDPOINT_NAME] = service_endpoint_name
    return short_app_name
