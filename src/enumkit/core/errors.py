"""
Error types for enumkit declaration and constant lookup.
"""

from dataclasses import dataclass
from typing import Any, Optional


class EnumKitError(Exception):
    """Base exception for all enumkit errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message} ({self.context.format()})"
        return self.message


class UnknownConstantError(EnumKitError, AttributeError):
    """
    Raised when a constant name is requested that the enum class does not declare.

    Examples:
    - ``Some.Four`` on a class declaring One, Two and Three
    - ``Some.of("Four")``
    - ``Some.isFour(4)`` or ``Some.One.isFour()``

    Lookups that are searches (``from_key``, ``from_value``) return None instead.
    """

    def __init__(self, message: str, key: str, enum_name: str, context: Optional["ErrorContext"] = None):
        self.key = key
        self.enum_name = enum_name
        super().__init__(message, context)


class EnumDefinitionError(EnumKitError, TypeError):
    """
    Raised when an enum class declares constants that cannot be normalized.

    Examples:
    - A tuple constant that is not a ``(value, label)`` pair
    - A label that is not a string
    - A constant name that shadows an inherited method
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, naming the enum class and constant involved.

    Attributes:
        enum_name: Qualified name of the enum class
        key: Constant name being declared or requested
        raw: Optional raw declared value of the constant
    """

    enum_name: str
    key: str | None = None
    raw: Any = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "in Some.One, declared as (1, 2, 3)"
        """
        location = f"in {self.enum_name}"
        if self.key is not None:
            location += f".{self.key}"
        if self.raw is not None:
            location += f", declared as {self.raw!r}"
        return location


def make_unknown_constant_error(enum_cls: type, key: Any) -> UnknownConstantError:
    """
    Helper to create an UnknownConstantError for a class and requested name.

    Args:
        enum_cls: The concrete enum class that was queried
        key: The requested constant name

    Returns:
        UnknownConstantError naming the key and the class
    """
    enum_name = enum_cls.__qualname__
    message = f"No enum constant '{key}' in class {enum_name}"
    return UnknownConstantError(message, key=str(key), enum_name=enum_name)


def make_definition_error(
    message: str,
    enum_name: str,
    key: str | None = None,
    raw: Any = None,
) -> EnumDefinitionError:
    """
    Helper to create an EnumDefinitionError with context.

    Args:
        message: Error description
        enum_name: Name of the enum class being defined
        key: Optional constant name at fault
        raw: Optional raw declared value

    Returns:
        EnumDefinitionError with context attached
    """
    context = ErrorContext(enum_name=enum_name, key=key, raw=raw)
    return EnumDefinitionError(message, context)
