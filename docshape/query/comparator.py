"""
Type-aware three-way comparison of field values.

``compare_values`` is the ordering primitive used by the sorter. For
well-typed input it is a total order (reflexive, antisymmetric and
transitive), which a stable multi-key sort requires.
"""

from __future__ import annotations

import unicodedata
from typing import Any, Optional, Tuple, Union

from ..core.types import FieldType
from ..utils.coercion import (
    coerce_boolean,
    coerce_date,
    coerce_number,
    date_to_millis,
    to_text,
)


def _three_way(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _compare_coerced(a: Optional[Any], b: Optional[Any]) -> int:
    """
    Compare coerced values where None marks a failed coercion.

    Failed coercions form one class ordered below every valid value, so
    unparseable input can never produce an inconsistent (NaN-like)
    comparison.
    """
    if a is None:
        return 0 if b is None else -1
    if b is None:
        return 1
    return _three_way(a, b)


def collation_key(value: Any) -> Tuple[str, str]:
    """
    Case-insensitive, accent-aware sort key for a value's text form.

    The primary component ignores accents so ``"école"`` sorts beside
    ``"ecole"``; the secondary component breaks ties on the accented
    form. Letter case never matters.
    """
    folded = to_text(value).casefold()
    base = "".join(
        ch for ch in unicodedata.normalize("NFKD", folded)
        if not unicodedata.combining(ch)
    )
    return base, folded


def _as_boolean(value: Any) -> bool:
    return coerce_boolean(value, default=bool(value))


def compare_values(
    a: Any,
    b: Any,
    type: Union[FieldType, str, None] = FieldType.STRING,
) -> int:
    """
    Compare two values under a declared field type.

    None sorts before any non-null value regardless of type, and two
    Nones are equal.

    Args:
        a: First value
        b: Second value
        type: NUMBER, DATE, BOOLEAN or anything else (compared as STRING)

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b
    """
    if a is None:
        return 0 if b is None else -1
    if b is None:
        return 1

    field_type = FieldType.parse(type) or FieldType.STRING

    if field_type == FieldType.NUMBER:
        return _compare_coerced(coerce_number(a), coerce_number(b))

    if field_type == FieldType.DATE:
        date_a = coerce_date(a)
        date_b = coerce_date(b)
        return _compare_coerced(
            date_to_millis(date_a) if date_a is not None else None,
            date_to_millis(date_b) if date_b is not None else None,
        )

    if field_type == FieldType.BOOLEAN:
        return _three_way(_as_boolean(a), _as_boolean(b))

    return _three_way(collation_key(a), collation_key(b))
