"""
Process-wide cache of enum metadata and enum instances.

Every enum class is bound to one ``EnumRegistry``. The registry builds the
class's constant table on first use and keeps the instances returned by
named access (``Some.One``, ``Some.of("One")``), so repeated named access
yields the same object. Searches (``from_key``, ``from_value``) always mint
a fresh, equal instance.

Population happens under a lock with a double check, so concurrent first
access from several threads builds each table and each named instance once.
Reads of populated entries take no lock.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from .config import EnumConfig
from .errors import make_unknown_constant_error
from .metadata import EnumMetadata, build_metadata

if TYPE_CHECKING:
    from .base import Enum

logger = logging.getLogger(__name__)


class EnumRegistry:
    """Metadata and instance cache keyed by enum class identity."""

    def __init__(self, config: EnumConfig | None = None) -> None:
        self._config = config if config is not None else EnumConfig()
        self._metadata: dict[type, EnumMetadata] = {}
        self._instances: dict[type, dict[str, Enum]] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> EnumConfig:
        return self._config

    def metadata(self, enum_cls: type[Enum]) -> EnumMetadata:
        """Return the constant table of ``enum_cls``, building it on first use."""
        meta = self._metadata.get(enum_cls)
        if meta is not None:
            return meta
        with self._lock:
            meta = self._metadata.get(enum_cls)
            if meta is None:
                meta = build_metadata(
                    enum_cls.__qualname__,
                    enum_cls._raw_constants_,
                    warn_on_duplicate_values=self._config.warn_on_duplicate_values,
                )
                self._metadata[enum_cls] = meta
        return meta

    def is_cached(self, enum_cls: type[Enum]) -> bool:
        """Whether the constant table of ``enum_cls`` has been built."""
        return enum_cls in self._metadata

    def instance_of(self, enum_cls: type[Enum], key: str) -> Enum:
        """
        Return the shared instance for a declared constant.

        Raises:
            UnknownConstantError: If ``key`` is not declared on ``enum_cls``
        """
        members = self._instances.get(enum_cls)
        if members is not None:
            member = members.get(key) if isinstance(key, str) else None
            if member is not None:
                return member

        meta = self.metadata(enum_cls)
        if key not in meta:
            raise make_unknown_constant_error(enum_cls, key)

        with self._lock:
            members = self._instances.setdefault(enum_cls, {})
            member = members.get(key)
            if member is None:
                value, label = meta.key_to_value[key]
                member = enum_cls._create(key, value, label)
                members[key] = member
        return member

    def instance_of_key(self, enum_cls: type[Enum], key: Any) -> Enum | None:
        """Return a fresh instance for ``key``, or None when it is not declared."""
        meta = self.metadata(enum_cls)
        if key not in meta:
            return None
        value, label = meta.key_to_value[key]
        return enum_cls._create(key, value, label)

    def instance_of_value(self, enum_cls: type[Enum], value: Any) -> Enum | None:
        """Return a fresh instance whose value is ``value``, or None when no constant has it."""
        meta = self.metadata(enum_cls)
        try:
            entry = meta.value_to_key.get(value)
        except TypeError:
            # unhashable candidate
            return None
        if entry is None:
            return None
        key, label = entry
        return enum_cls._create(key, meta.key_to_value[key][0], label)

    def clear(self, enum_cls: type[Enum] | None = None) -> None:
        """Drop cached tables and instances for one class, or for every class."""
        with self._lock:
            if enum_cls is None:
                self._metadata.clear()
                self._instances.clear()
            else:
                self._metadata.pop(enum_cls, None)
                self._instances.pop(enum_cls, None)
        logger.debug("Cleared enum registry cache for %s", enum_cls.__qualname__ if enum_cls else "all classes")


_default_registry = EnumRegistry()


def get_default_registry() -> EnumRegistry:
    """Return the registry used by enum classes that do not name their own."""
    return _default_registry
