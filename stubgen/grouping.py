"""Assign operations to API classes.

Four strategies, selected by the ``grouping`` option or the generator
flavour:

  base-path     /employees, /employees/{id} -> "employees"; /offices -> "offices"
  client-group  like base-path, but x-client-group overrides the group key
  operation-id  one group per operation
  single        everything in "global"

The driver calls add_operation_to_group once per tag of an operation, so
a repeated submission of the same operation id into the same group is a
silent no-op.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Callable

from .codegen_model import Operation
from .config import CLIENT, SERVER
from .errors import ConfigurationError
from .extensions import get_client_group

BASE_PATH_PATTERN = re.compile(r"^/*([^/]+)(/.*|$)")
DEFAULT_GROUP = "default"
GLOBAL_GROUP = "global"


class GroupingStrategy(Enum):
    BASE_PATH = "base-path"
    CLIENT_GROUP = "client-group"
    OPERATION_ID = "operation-id"
    SINGLE = "single"

    @classmethod
    def from_value(cls, value: Any, flavor: str = SERVER) -> GroupingStrategy:
        """Look up a strategy by option value; None picks the flavour default."""
        if value is None:
            return cls.SINGLE if flavor == CLIENT else cls.OPERATION_ID
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        for strategy in cls:
            if strategy.value == normalized:
                return strategy
        raise ConfigurationError(
            f"Unknown grouping strategy '{value}', expected one of "
            f"{', '.join(s.value for s in cls)}"
        )


def split_base_path(resource_path: str) -> tuple[str, str] | None:
    """Return (base path, remainder) for a resource path, None if it has no segment."""
    match = BASE_PATH_PATTERN.match(resource_path or "")
    if not match:
        return None
    return re.sub(r"[^a-zA-Z]", "", match.group(1)), match.group(2)


def base_path_of(resource_path: str) -> str:
    """First path segment reduced to letters, or "default"."""
    split = split_base_path(resource_path)
    return split[0] if split else DEFAULT_GROUP


def _is_subresource(resource_path: str) -> bool:
    split = split_base_path(resource_path)
    return split is not None and bool(split[1].strip("/"))


# Each key function returns (group key, base path); a base path of None
# means the strategy leaves base_name and subresource_operation alone.
KeyFunction = Callable[[Operation, str, dict[str, Any]], tuple[str, str | None]]


def _by_base_path(operation: Operation, resource_path: str, vendor_extensions: dict[str, Any]) -> tuple[str, str | None]:
    base_path = base_path_of(resource_path)
    return base_path, base_path


def _by_client_group(operation: Operation, resource_path: str, vendor_extensions: dict[str, Any]) -> tuple[str, str | None]:
    base_path = base_path_of(resource_path)
    client_group = get_client_group(vendor_extensions)
    return (client_group if client_group is not None else base_path), base_path


def _by_operation_id(operation: Operation, resource_path: str, vendor_extensions: dict[str, Any]) -> tuple[str, str | None]:
    return operation.operation_id, None


def _into_single_group(operation: Operation, resource_path: str, vendor_extensions: dict[str, Any]) -> tuple[str, str | None]:
    return GLOBAL_GROUP, None


_KEY_FUNCTIONS: dict[GroupingStrategy, KeyFunction] = {
    GroupingStrategy.BASE_PATH: _by_base_path,
    GroupingStrategy.CLIENT_GROUP: _by_client_group,
    GroupingStrategy.OPERATION_ID: _by_operation_id,
    GroupingStrategy.SINGLE: _into_single_group,
}


def group_key(strategy: GroupingStrategy, operation: Operation, resource_path: str) -> tuple[str, str | None]:
    return _KEY_FUNCTIONS[strategy](operation, resource_path, operation.vendor_extensions)


def add_operation_to_group(
    strategy: GroupingStrategy,
    tag: str | None,
    resource_path: str,
    operation: Operation,
    operation_groups: dict[str, list[Operation]],
) -> str:
    """Put an operation into its group (modifies operation_groups in place).

    Returns the group key. The tag is accepted for symmetry with the
    driver loop; none of the strategies group by tag.
    """
    key, base_path = group_key(strategy, operation, resource_path)
    operations = operation_groups.setdefault(key, [])
    if any(op.operation_id == operation.operation_id for op in operations):
        return key

    operations.append(operation)

    if base_path is not None:
        operation.subresource_operation = _is_subresource(resource_path)
        operation.base_name = base_path
    return key
