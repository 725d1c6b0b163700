"""
Shared type tags and sort configuration for docshape.

Every comparison and filter decision is mediated by a FieldType tag;
values whose type is unknown or ambiguous are treated as strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class _Unset:
    """Marker for a value that was never provided."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


# A condition whose value key is absent (the UI's "undefined")
UNSET = _Unset()


class FieldType(str, Enum):
    """Semantic field types."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ARRAY = "array"
    NULL = "null"
    OBJECT = "object"

    @classmethod
    def parse(cls, value: Union[str, "FieldType", None]) -> Optional["FieldType"]:
        """
        Parse a type tag, case-insensitively.

        Returns None for a missing tag and STRING for an unknown one.
        """
        if value is None or value == "":
            return None
        if isinstance(value, FieldType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.STRING


class SortDirection(str, Enum):
    """Sort directions, using the store's asc/desc tokens."""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(
        cls,
        value: Union[str, "SortDirection", None],
        default: "SortDirection" = None,
    ) -> "SortDirection":
        """
        Normalize a direction string.

        Accepts asc/ascending and desc/descending in any case. Anything
        else maps to ``default`` (ASC when not given).
        """
        if isinstance(value, SortDirection):
            return value
        text = str(value or "").strip().lower()
        if text in ("asc", "ascending"):
            return cls.ASC
        if text in ("desc", "descending"):
            return cls.DESC
        return default if default is not None else cls.ASC


class FilterLogic(str, Enum):
    """How multiple filter conditions are combined."""
    AND = "AND"
    OR = "OR"

    @classmethod
    def parse(cls, value: Union[str, "FilterLogic", None]) -> "FilterLogic":
        if isinstance(value, FilterLogic):
            return value
        if str(value or "").strip().upper() == "OR":
            return cls.OR
        return cls.AND


@dataclass
class SortKey:
    """
    One entry of a multi-column sort configuration.

    Attributes:
        field: Field name (exact key or dotted path)
        direction: ASC or DESC
        type: Comparison type; None means "infer from the documents"
    """
    field: str
    direction: SortDirection = SortDirection.ASC
    type: Optional[FieldType] = None

    def __post_init__(self):
        self.direction = SortDirection.parse(self.direction)
        self.type = FieldType.parse(self.type)

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "field": self.field,
            "direction": self.direction.value,
        }
        if self.type is not None:
            data["type"] = self.type.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SortKey":
        return cls(
            field=data.get("field") or "",
            direction=data.get("direction"),
            type=data.get("type"),
        )
