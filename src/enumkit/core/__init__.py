"""Core enumkit functionality: enum base class, constant tables, registry, records."""

from .base import Enum, EnumMeta
from .config import EnumConfig
from .errors import (
    EnumDefinitionError,
    EnumKitError,
    ErrorContext,
    UnknownConstantError,
)
from .metadata import EnumMetadata, build_metadata, normalize_constant
from .records import EnumRecord
from .registry import EnumRegistry, get_default_registry
from .serialization import EnumJSONEncoder, dumps

__all__ = [
    "Enum",
    "EnumMeta",
    "EnumConfig",
    "EnumKitError",
    "UnknownConstantError",
    "EnumDefinitionError",
    "ErrorContext",
    "EnumMetadata",
    "build_metadata",
    "normalize_constant",
    "EnumRecord",
    "EnumRegistry",
    "get_default_registry",
    "EnumJSONEncoder",
    "dumps",
]
