"""
Enum base class with keys, values and labels.

Subclass ``Enum`` and declare constants as class attributes:

    class Some(Enum):
        One = (1, "一")
        Two = (2, "二")
        Three = (3, "三")

    class Other(Enum):
        Haha = "hh"
        Bibi = "bb"

Each constant becomes an instance exposing ``key``, ``value`` and ``label``:

    >>> Some.One.key, Some.One.value, Some.One.label
    ('One', 1, '一')
    >>> Some.One is Some.of("One")
    True
    >>> Some.from_value(1) == Some.One
    True
    >>> Some.isOne(1), Some.One.isTwo()
    (True, False)
    >>> Some.value_to_label(2)
    '二'
    >>> Some.One.to_json()
    '{"key":"One","value":1,"label":"\\\\u4e00"}'

Named access (``Some.One``, ``Some.of``) returns one shared instance per
constant; ``from_key`` and ``from_value`` return fresh instances. Instances
compare by class, key, value and label, so code should use ``==`` rather
than ``is``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from .errors import UnknownConstantError, make_definition_error, make_unknown_constant_error
from .metadata import EnumMetadata
from .records import EnumRecord
from .registry import EnumRegistry, get_default_registry


_MISSING: Any = object()


def _is_constant(name: str, attr: Any) -> bool:
    """Whether a class-body attribute declares an enum constant."""
    if name.startswith("_"):
        return False
    if isinstance(attr, type) or callable(attr):
        return False
    # functions, properties, classmethod/staticmethod and other descriptors
    return not hasattr(type(attr), "__get__")


def _restore_member(enum_cls: type[Enum], key: str) -> Enum:
    return enum_cls.of(key)


class EnumMeta(type):
    """
    Metaclass collecting declared constants and resolving them by name.

    At class creation the constants are removed from the class body and kept,
    in declaration order, in ``_raw_constants_`` (inherited constants first).
    Attribute access on the class then resolves:

    - ``Some.One``   -> the shared instance for constant ``One``
    - ``Some.isOne`` -> predicate ``value -> bool`` for constant ``One``
    """

    _raw_constants_: Mapping[str, Any]
    _registry_: EnumRegistry | None

    def __new__(
        mcls,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        registry: EnumRegistry | None = None,
        **kwargs: Any,
    ) -> EnumMeta:
        raw: dict[str, Any] = {}
        for base in reversed(bases):
            raw.update(getattr(base, "_raw_constants_", {}))

        own: dict[str, Any] = {}
        body: dict[str, Any] = {}
        for attr_name, attr in namespace.items():
            if _is_constant(attr_name, attr):
                own[attr_name] = attr
            else:
                body[attr_name] = attr
        raw.update(own)

        cls = super().__new__(mcls, name, bases, body, **kwargs)

        for key in own:
            for klass in (*cls.__mro__, *mcls.__mro__):
                if key in vars(klass):
                    raise make_definition_error(
                        f"Enum constant '{key}' shadows attribute of {klass.__qualname__}",
                        cls.__qualname__,
                        key,
                    )

        cls._raw_constants_ = MappingProxyType(raw)
        cls._registry_ = registry if registry is not None else getattr(cls, "_registry_", None)
        return cls

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        raise TypeError(
            f"{cls.__qualname__} cannot be instantiated directly; "
            f"use {cls.__qualname__}.of(key), from_key(key) or from_value(value)"
        )

    def __getattr__(cls, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        raw = cls._raw_constants_
        if name in raw:
            return cls._get_registry().instance_of(cls, name)

        prefix = cls._get_registry().config.predicate_prefix
        key = name[len(prefix) :]
        if name.startswith(prefix) and key in raw:

            def predicate(value: Any) -> bool:
                return cls.matches(key, value)

            predicate.__name__ = name
            predicate.__qualname__ = f"{cls.__qualname__}.{name}"
            return predicate

        raise make_unknown_constant_error(cls, name)

    def __iter__(cls) -> Iterator[Any]:
        return iter([cls.of(key) for key in cls._raw_constants_])

    def __len__(cls) -> int:
        return len(cls._raw_constants_)

    def __bool__(cls) -> bool:
        return True

    def __contains__(cls, item: object) -> bool:
        if isinstance(item, cls):
            return True
        return isinstance(item, str) and item in cls._raw_constants_

    def __dir__(cls) -> list[str]:
        return sorted(set(super().__dir__()) | set(cls._raw_constants_))

    def _get_registry(cls) -> EnumRegistry:
        registry = cls._registry_
        return registry if registry is not None else get_default_registry()


class Enum(metaclass=EnumMeta):
    """
    Base class for enumerations whose constants carry a value and a label.

    Constants are declared as class attributes, either as a ``(value, label)``
    pair or as a scalar whose string form becomes the label. Instances cannot
    be created directly; use named access, ``of``, ``from_key`` or
    ``from_value``.

    Pass ``registry=`` in the class statement to bind the class (and its
    subclasses) to a registry other than the default one.
    """

    __slots__ = ("_key", "_value", "_label")

    @classmethod
    def _create(cls, key: str, value: Any, label: str) -> Enum:
        member = object.__new__(cls)
        object.__setattr__(member, "_key", key)
        object.__setattr__(member, "_value", value)
        object.__setattr__(member, "_label", label)
        return member

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, key: str) -> Enum:
        """
        Return the shared instance for a declared constant.

        Raises:
            UnknownConstantError: If ``key`` is not a constant of this class
        """
        return cls._get_registry().instance_of(cls, key)

    @classmethod
    def from_key(cls, key: str) -> Enum | None:
        """Return a new instance for ``key``, or None if no constant has that name."""
        return cls._get_registry().instance_of_key(cls, key)

    @classmethod
    def from_value(cls, value: Any) -> Enum | None:
        """Return a new instance whose value is ``value``, or None if no constant has it."""
        return cls._get_registry().instance_of_value(cls, value)

    @classmethod
    def matches(cls, key: str, value: Any) -> bool:
        """
        Whether constant ``key`` has value ``value``.

        With strict predicates (the default) the types must match as well,
        so ``Some.matches("One", "1")`` is False.

        Raises:
            UnknownConstantError: If ``key`` is not a constant of this class
        """
        expected = cls.of(key).value
        if cls._get_registry().config.strict_predicates and type(expected) is not type(value):
            return False
        return bool(expected == value)

    # ------------------------------------------------------------------
    # Bulk queries
    # ------------------------------------------------------------------

    @classmethod
    def metadata(cls) -> EnumMetadata:
        return cls._get_registry().metadata(cls)

    @classmethod
    def all_constants(cls, value_as_key: bool = False) -> dict[Any, tuple[Any, str]]:
        """
        Return every constant as a mapping.

        By default the mapping is ``{key: (value, label)}``; with
        ``value_as_key=True`` it is ``{value: (key, label)}``.

        Examples:
            >>> Some.all_constants()
            {'One': (1, '一'), 'Two': (2, '二'), 'Three': (3, '三')}
            >>> Some.all_constants(value_as_key=True)
            {1: ('One', '一'), 2: ('Two', '二'), 3: ('Three', '三')}
        """
        meta = cls.metadata()
        if value_as_key:
            return dict(meta.value_to_key)
        return dict(meta.key_to_value)

    @classmethod
    def as_list(cls) -> list[EnumRecord]:
        """Return one record per constant, in declaration order."""
        return [EnumRecord(**record) for record in cls.metadata().records()]

    @classmethod
    def as_dicts(cls) -> list[dict[str, Any]]:
        """Return ``{"key", "value", "label"}`` dicts, in declaration order."""
        return cls.metadata().records()

    @classmethod
    def all_keys(cls) -> list[str]:
        return cls.metadata().keys

    @classmethod
    def all_values(cls) -> list[Any]:
        return cls.metadata().values

    @classmethod
    def all_labels(cls) -> list[str]:
        return cls.metadata().labels

    @classmethod
    def value_to_label(cls, value: Any = _MISSING, default: Any = None) -> Any:
        """
        Return the label of ``value``, or ``default`` if no constant has it.

        Called without arguments, return the whole ``{value: label}`` mapping.
        """
        mapping = cls.metadata().value_label_map()
        if value is _MISSING:
            return mapping
        if value is None:
            return default
        try:
            return mapping.get(value, default)
        except TypeError:
            return default

    @classmethod
    def label_to_value(cls, label: Any = _MISSING, default: Any = None) -> Any:
        """
        Return the value labelled ``label``, or ``default`` if no constant has it.

        Called without arguments, return the whole ``{label: value}`` mapping.
        When several constants share a label, the last declared one wins.
        """
        mapping = cls.metadata().label_value_map()
        if label is _MISSING:
            return mapping
        if label is None:
            return default
        try:
            return mapping.get(label, default)
        except TypeError:
            return default

    @classmethod
    def is_valid_key(cls, key: Any) -> bool:
        return key in cls.all_keys()

    @classmethod
    def is_valid_value(cls, value: Any) -> bool:
        return value in cls.all_values()

    @classmethod
    def is_valid_label(cls, label: Any) -> bool:
        return label in cls.all_labels()

    # ------------------------------------------------------------------
    # Instance API
    # ------------------------------------------------------------------

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> Any:
        return self._value

    @property
    def label(self) -> str:
        return self._label

    def represents(self, key: str) -> bool:
        """
        Whether this instance stands for constant ``key``.

        Raises:
            UnknownConstantError: If ``key`` is not a constant of this class
        """
        return type(self).matches(key, self._value)

    def to_record(self) -> EnumRecord:
        return EnumRecord(key=self._key, value=self._value, label=self._label)

    def to_dict(self) -> dict[str, Any]:
        return {"key": self._key, "value": self._value, "label": self._label}

    def to_json(self, *, ensure_ascii: bool | None = None) -> str:
        """Render as ``{"key":...,"value":...,"label":...}``."""
        if ensure_ascii is None:
            ensure_ascii = type(self)._get_registry().config.json_ensure_ascii
        return self.to_record().to_json(ensure_ascii=ensure_ascii)

    def __getattr__(self, name: str) -> Callable[[], bool]:
        if name.startswith("_"):
            raise AttributeError(name)
        prefix = type(self)._get_registry().config.predicate_prefix
        if name.startswith(prefix) and len(name) > len(prefix):
            key = name[len(prefix) :]
            if key not in type(self)._raw_constants_:
                raise make_unknown_constant_error(type(self), key)

            def predicate() -> bool:
                return self.represents(key)

            predicate.__name__ = name
            return predicate
        raise AttributeError(f"'{type(self).__qualname__}' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__qualname__} instances are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__qualname__} instances are immutable")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (self._key, self._value, self._label) == (other._key, other._value, other._label)  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._key))

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__}.{self._key}: value={self._value!r}, label={self._label!r}>"

    def __reduce__(self) -> tuple[Any, ...]:
        return _restore_member, (type(self), self._key)

    def __copy__(self) -> Enum:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Enum:
        return self

    # ------------------------------------------------------------------
    # pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda member: member.to_dict(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """
        Describe the field as accepted on input and as rendered on output.

        Validation accepts any declared value or key; serialization emits
        the key/value/label record.
        """
        if handler.mode == "serialization":
            return {
                "title": cls.__name__,
                "type": "object",
                "properties": {
                    "key": {"enum": cls.all_keys()},
                    "value": {"enum": cls.all_values()},
                    "label": {"type": "string"},
                },
                "required": ["key", "value", "label"],
            }
        return {"title": cls.__name__, "enum": [*cls.all_values(), *cls.all_keys()]}

    @classmethod
    def _validate(cls, candidate: Any) -> Enum:
        """
        Accept an instance, a declared value, a declared key or a record dict.

        Instances keep their own class, so a subclass instance stays a
        subclass instance. A record must name a declared key, and any
        ``value`` or ``label`` it carries must agree with that constant.
        """
        try:
            if isinstance(candidate, cls):
                return type(candidate).of(candidate.key)
            if isinstance(candidate, Mapping):
                return cls._validate_record(candidate)
            member = cls.from_value(candidate)
            if member is not None:
                return cls.of(member.key)
            if isinstance(candidate, str) and cls.is_valid_key(candidate):
                return cls.of(candidate)
        except UnknownConstantError as exc:
            raise ValueError(str(exc)) from exc
        raise ValueError(f"{candidate!r} is not a valid {cls.__qualname__}")

    @classmethod
    def _validate_record(cls, record: Mapping[str, Any]) -> Enum:
        key = record.get("key")
        if not cls.is_valid_key(key):
            raise ValueError(f"{record!r} does not name a constant of {cls.__qualname__}")
        member = cls.of(key)
        if "value" in record and record["value"] != member.value:
            raise ValueError(
                f"Record value {record['value']!r} does not match {cls.__qualname__}.{key} ({member.value!r})"
            )
        if "label" in record and record["label"] != member.label:
            raise ValueError(
                f"Record label {record['label']!r} does not match {cls.__qualname__}.{key} ({member.label!r})"
            )
        return member
