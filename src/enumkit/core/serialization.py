"""
JSON helpers that understand enum instances and records.

Usage:
    json.dumps({"level": Some.One}, cls=EnumJSONEncoder)
    dumps([Some.One, Some.Two])
"""

from __future__ import annotations

import json
from typing import Any

from .base import Enum
from .records import JSON_SEPARATORS, EnumRecord


class EnumJSONEncoder(json.JSONEncoder):
    """JSON encoder that renders enum instances and records as key/value/label objects."""

    def default(self, o: Any) -> Any:
        if isinstance(o, Enum):
            return o.to_dict()
        if isinstance(o, EnumRecord):
            return o.model_dump(mode="json")
        return super().default(o)


def dumps(obj: Any, *, ensure_ascii: bool = True, **kwargs: Any) -> str:
    """``json.dumps`` with ``EnumJSONEncoder`` and compact separators."""
    kwargs.setdefault("separators", JSON_SEPARATORS)
    return json.dumps(obj, cls=EnumJSONEncoder, ensure_ascii=ensure_ascii, **kwargs)
