"""
Configuration for enum registries.

A registry is constructed with an ``EnumConfig``; enum classes bound to that
registry pick up its predicate and serialization behaviour. No environment
variables are consulted.

Usage:
    from enumkit.core.config import EnumConfig
    from enumkit.core.registry import EnumRegistry

    loose = EnumRegistry(EnumConfig(strict_predicates=False))

    class Flag(Enum, registry=loose):
        On = (1, "on")
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PREDICATE_PREFIX = "is"


class EnumConfig(BaseModel):
    """Behaviour switches shared by every enum class bound to one registry."""

    predicate_prefix: str = Field(
        default=DEFAULT_PREDICATE_PREFIX,
        description="Prefix for dynamic predicates, e.g. 'is' gives Some.isOne(1)",
    )
    strict_predicates: bool = Field(
        default=True,
        description="Predicates also require the candidate's type to match (1 is not '1')",
    )
    json_ensure_ascii: bool = Field(
        default=True,
        description="Escape non-ASCII label text when rendering JSON",
    )
    warn_on_duplicate_values: bool = Field(
        default=True,
        description="Log a warning when two constants share a value",
    )

    @field_validator("predicate_prefix")
    @classmethod
    def validate_predicate_prefix(cls, v: str) -> str:
        """Predicate prefix must be usable as the start of an attribute name."""
        if not v.isidentifier() or v.startswith("_"):
            raise ValueError(f"Invalid predicate prefix '{v}'. Must be a public identifier")
        return v

    model_config = ConfigDict(frozen=True)
