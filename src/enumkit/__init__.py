"""
enumkit - enumerations whose constants carry a key, a value and a label.

    from enumkit import Enum

    class Some(Enum):
        One = (1, "一")
        Two = (2, "二")

    Some.One.label          # '一'
    Some.from_value(2)      # <Some.Two: value=2, label='二'>
    Some.value_to_label()   # {1: '一', 2: '二'}
"""

from ._version import __version__
from .core.base import Enum, EnumMeta
from .core.config import EnumConfig
from .core.errors import EnumDefinitionError, EnumKitError, UnknownConstantError
from .core.records import EnumRecord
from .core.registry import EnumRegistry, get_default_registry
from .core.serialization import EnumJSONEncoder, dumps

__all__ = [
    "__version__",
    "Enum",
    "EnumMeta",
    "EnumConfig",
    "EnumKitError",
    "UnknownConstantError",
    "EnumDefinitionError",
    "EnumRecord",
    "EnumRegistry",
    "get_default_registry",
    "EnumJSONEncoder",
    "dumps",
]
