"""
Constant tables for enum classes.

An enum class declares its constants in one of two shapes:

    One = (1, "一")     # (value, label) pair
    Haha = "hh"         # scalar; the label is the value's string form

``build_metadata`` normalizes the declared constants into an ``EnumMetadata``
table: an ordered key -> (value, label) mapping in declaration order plus its
value -> (key, label) inverse.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .errors import make_definition_error

logger = logging.getLogger(__name__)


def _is_hashable(obj: Any) -> bool:
    if not isinstance(obj, Hashable):
        return False
    try:
        hash(obj)
    except TypeError:
        return False
    return True


def normalize_constant(raw: Any, enum_name: str = "", key: str | None = None) -> tuple[Any, str]:
    """
    Split a declared constant into its (value, label) pair.

    Args:
        raw: The declared constant, either a scalar or a (value, label) pair
        enum_name: Name of the declaring class, used in error context
        key: Name of the constant, used in error context

    Returns:
        Tuple of (value, label)

    Raises:
        EnumDefinitionError: If a tuple/list is not a pair or the label is not a string

    Examples:
        >>> normalize_constant((1, "一"))
        (1, '一')
        >>> normalize_constant("hh")
        ('hh', 'hh')
        >>> normalize_constant(7)
        (7, '7')
    """
    if isinstance(raw, tuple | list):
        if len(raw) != 2:
            raise make_definition_error(
                f"Enum constant must be a scalar or a (value, label) pair, got {len(raw)} items",
                enum_name,
                key,
                raw,
            )
        value, label = raw
        if not isinstance(label, str):
            raise make_definition_error(
                f"Enum label must be a string, got {type(label).__name__}",
                enum_name,
                key,
                raw,
            )
        return value, label
    return raw, str(raw)


@dataclass(frozen=True)
class EnumMetadata:
    """
    Normalized constant table of one enum class.

    Attributes:
        enum_name: Qualified name of the enum class
        key_to_value: key -> (value, label), in declaration order
        value_to_key: value -> (key, label); the last declaration wins on duplicate values
    """

    enum_name: str
    key_to_value: Mapping[str, tuple[Any, str]]
    value_to_key: Mapping[Any, tuple[str, str]]

    @property
    def keys(self) -> list[str]:
        return list(self.key_to_value)

    @property
    def values(self) -> list[Any]:
        return [value for value, _ in self.key_to_value.values()]

    @property
    def labels(self) -> list[str]:
        return [label for _, label in self.key_to_value.values()]

    def __len__(self) -> int:
        return len(self.key_to_value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self.key_to_value

    def value_label_map(self) -> dict[Any, str]:
        """Map each hashable value to its label, in declaration order."""
        return {value: label for value, label in self.key_to_value.values() if _is_hashable(value)}

    def label_value_map(self) -> dict[str, Any]:
        """Map each label to its value; on shared labels the last declared constant wins."""
        return {label: value for value, label in self.key_to_value.values()}

    def records(self) -> list[dict[str, Any]]:
        """Return ``{"key", "value", "label"}`` dicts in declaration order."""
        return [
            {"key": key, "value": value, "label": label}
            for key, (value, label) in self.key_to_value.items()
        ]


def build_metadata(
    enum_name: str,
    raw_constants: Mapping[str, Any],
    *,
    warn_on_duplicate_values: bool = True,
) -> EnumMetadata:
    """
    Build the constant table for one enum class.

    Args:
        enum_name: Qualified name of the enum class
        raw_constants: Declared constants, name -> raw value, in declaration order
        warn_on_duplicate_values: Log a warning when two keys share a value

    Returns:
        Frozen EnumMetadata for the class

    Raises:
        EnumDefinitionError: If a constant name or value cannot be normalized
    """
    key_to_value: dict[str, tuple[Any, str]] = {}
    value_to_key: dict[Any, tuple[str, str]] = {}

    for key, raw in raw_constants.items():
        if not isinstance(key, str) or not key.isidentifier():
            raise make_definition_error(f"Invalid enum constant name {key!r}", enum_name, None, raw)
        value, label = normalize_constant(raw, enum_name, key)
        key_to_value[key] = (value, label)

        if not _is_hashable(value):
            logger.warning(
                "Enum %s.%s has unhashable value %r; from_value() cannot find it",
                enum_name,
                key,
                value,
            )
            continue
        if warn_on_duplicate_values and value in value_to_key:
            logger.warning(
                "Enum %s.%s reuses value %r of %s.%s; value lookups resolve to %s",
                enum_name,
                key,
                value,
                enum_name,
                value_to_key[value][0],
                key,
            )
        value_to_key[value] = (key, label)

    logger.debug("Built enum metadata for %s (%d constants)", enum_name, len(key_to_value))
    return EnumMetadata(
        enum_name=enum_name,
        key_to_value=MappingProxyType(key_to_value),
        value_to_key=MappingProxyType(value_to_key),
    )
