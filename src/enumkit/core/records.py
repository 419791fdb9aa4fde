"""
Record projection of enum instances.

A record is the structured-data form of one enumerant, with fields in the
order ``key``, ``value``, ``label``:

    {"key": "One", "value": 1, "label": "\\u4e00"}
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

JSON_SEPARATORS = (",", ":")


class EnumRecord(BaseModel):
    """Key, value and label of one enum constant."""

    key: str = Field(..., description="Constant name")
    value: Any = Field(..., description="Constant payload, JSON type preserved")
    label: str = Field(..., description="Human-readable label")

    model_config = ConfigDict(frozen=True)

    def to_json(self, *, ensure_ascii: bool = True) -> str:
        """
        Render the record as compact JSON.

        Args:
            ensure_ascii: Escape non-ASCII characters (``一`` becomes ``\\u4e00``)

        Returns:
            JSON text like ``{"key":"One","value":1,"label":"\\u4e00"}``
        """
        return json.dumps(
            self.model_dump(mode="json"),
            ensure_ascii=ensure_ascii,
            separators=JSON_SEPARATORS,
        )
