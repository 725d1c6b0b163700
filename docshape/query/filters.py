"""
Typed filter evaluation for in-memory document collections.

Supports:
- Equality operators (equals, notEquals)
- String operators (contains, notContains, startsWith, endsWith, regex)
- Ordering operators (greaterThan, greaterThanOrEqual, lessThan, lessThanOrEqual)
- Range and list operators (inRange, in, notIn)
- Null checks (isNull, isEmpty, isNotNull, isNotEmpty)
- AND/OR combination of conditions

Bad input never raises: unknown operators pass every document, invalid
regular expressions match nothing, and half-filled conditions do not
constrain.

Example:
    >>> conditions = [
    ...     FilterCondition("status", FilterOperator.EQUALS, "active"),
    ...     FilterCondition("age", "greaterThan", "30", type="number"),
    ... ]
    >>> active_adults = apply_filters(documents, conditions, "AND")
    >>>
    >>> # Single value check
    >>> evaluate("Hello World", "contains", "world")
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union
import re

from ..core.document import get_field_value
from ..core.types import UNSET, FieldType, FilterLogic
from ..utils.coercion import coerce_boolean, coerce_date, coerce_number, to_text
from ..utils.logging import get_logger
from ..utils.validation import validate_documents

logger = get_logger(__name__)


class FilterOperator(str, Enum):
    """Filter comparison operators."""

    # Equality
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"

    # String operations (case-insensitive)
    CONTAINS = "contains"
    NOT_CONTAINS = "notContains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    REGEX = "regex"

    # Ordering
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"

    # Range and lists
    IN_RANGE = "inRange"        # [min, max], inclusive
    IN = "in"
    NOT_IN = "notIn"

    # Null checks
    IS_NULL = "isNull"
    IS_EMPTY = "isEmpty"
    IS_NOT_NULL = "isNotNull"
    IS_NOT_EMPTY = "isNotEmpty"


# Symbolic and Mango spellings accepted alongside the canonical names
OPERATOR_ALIASES: Dict[str, FilterOperator] = {
    "=": FilterOperator.EQUALS,
    "$eq": FilterOperator.EQUALS,
    "!=": FilterOperator.NOT_EQUALS,
    "$ne": FilterOperator.NOT_EQUALS,
    ">": FilterOperator.GREATER_THAN,
    "$gt": FilterOperator.GREATER_THAN,
    ">=": FilterOperator.GREATER_THAN_OR_EQUAL,
    "$gte": FilterOperator.GREATER_THAN_OR_EQUAL,
    "<": FilterOperator.LESS_THAN,
    "$lt": FilterOperator.LESS_THAN,
    "<=": FilterOperator.LESS_THAN_OR_EQUAL,
    "$lte": FilterOperator.LESS_THAN_OR_EQUAL,
    "$in": FilterOperator.IN,
    "$nin": FilterOperator.NOT_IN,
    "$regex": FilterOperator.REGEX,
}

# Operators that hold for a missing/null field value
NULL_MATCHING = frozenset({FilterOperator.IS_NULL, FilterOperator.IS_EMPTY})

# Operators that inspect only the field value
NULL_CHECKS = frozenset({
    FilterOperator.IS_NULL,
    FilterOperator.IS_EMPTY,
    FilterOperator.IS_NOT_NULL,
    FilterOperator.IS_NOT_EMPTY,
})

LIST_OPERATORS = frozenset({FilterOperator.IN, FilterOperator.NOT_IN})


def parse_operator(operator: Union[str, FilterOperator, None]) -> Optional[FilterOperator]:
    """Resolve an operator name or alias; None when unrecognized."""
    if isinstance(operator, FilterOperator):
        return operator
    if not isinstance(operator, str):
        return None
    try:
        return FilterOperator(operator)
    except ValueError:
        return OPERATOR_ALIASES.get(operator)


def _is_blank(value: Any) -> bool:
    return value is None or value is UNSET or (isinstance(value, str) and value == "")


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without cross-type coercion (True never equals 1)."""
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",")]


def evaluate(
    field_value: Any,
    operator: Union[str, FilterOperator, None],
    filter_value: Any,
) -> bool:
    """
    Evaluate one predicate against one field value.

    A null field, or an empty filter value, only satisfies isNull/isEmpty.
    Otherwise the null-check operators look at the field value alone.
    Unrecognized operators pass.

    Args:
        field_value: The document's value (None when missing)
        operator: Operator name or alias
        filter_value: The value to compare against

    Returns:
        True if the field value satisfies the predicate
    """
    op = parse_operator(operator)

    if field_value is None or field_value is UNSET:
        return op in NULL_MATCHING

    if _is_blank(filter_value):
        return op in NULL_MATCHING

    if op in NULL_CHECKS:
        empty = _is_blank(field_value)
        if op in NULL_MATCHING:
            return empty
        return not empty

    if op is None:
        logger.debug(f"Unknown filter operator {operator!r}, passing value through")
        return True

    try:
        return _compare(field_value, op, filter_value)
    except (TypeError, ValueError):
        return False


def _compare(field_value: Any, op: FilterOperator, filter_value: Any) -> bool:
    """Compare field value using operator."""

    # Equality
    if op == FilterOperator.EQUALS:
        return strict_equals(field_value, filter_value)

    if op == FilterOperator.NOT_EQUALS:
        return not strict_equals(field_value, filter_value)

    # String operations
    if op in (
        FilterOperator.CONTAINS,
        FilterOperator.NOT_CONTAINS,
        FilterOperator.STARTS_WITH,
        FilterOperator.ENDS_WITH,
    ):
        value_text = to_text(field_value).lower()
        filter_text = to_text(filter_value).lower()

        if op == FilterOperator.CONTAINS:
            return filter_text in value_text
        if op == FilterOperator.NOT_CONTAINS:
            return filter_text not in value_text
        if op == FilterOperator.STARTS_WITH:
            return value_text.startswith(filter_text)
        return value_text.endswith(filter_text)

    if op == FilterOperator.REGEX:
        try:
            pattern = re.compile(to_text(filter_value), re.IGNORECASE)
        except re.error:
            return False
        return pattern.search(to_text(field_value).lower()) is not None

    # Ordering
    if op == FilterOperator.GREATER_THAN:
        return field_value > filter_value

    if op == FilterOperator.GREATER_THAN_OR_EQUAL:
        return field_value >= filter_value

    if op == FilterOperator.LESS_THAN:
        return field_value < filter_value

    if op == FilterOperator.LESS_THAN_OR_EQUAL:
        return field_value <= filter_value

    # Range; a blank bound leaves that side open
    if op == FilterOperator.IN_RANGE:
        if not isinstance(filter_value, (list, tuple)) or len(filter_value) != 2:
            return False
        low, high = filter_value
        if not _is_blank(low) and field_value < low:
            return False
        if not _is_blank(high) and field_value > high:
            return False
        return True

    # Lists
    if op == FilterOperator.IN:
        if not isinstance(filter_value, (list, tuple, set, frozenset)):
            return False
        return any(strict_equals(field_value, item) for item in filter_value)

    if op == FilterOperator.NOT_IN:
        if not isinstance(filter_value, (list, tuple, set, frozenset)):
            return True
        return not any(strict_equals(field_value, item) for item in filter_value)

    return True


def _parse_scalar(value: Any, field_type: FieldType) -> Any:
    if _is_blank(value):
        return value

    if field_type == FieldType.NUMBER:
        number = coerce_number(value)
        return value if number is None else number

    if field_type == FieldType.BOOLEAN:
        flag = coerce_boolean(value)
        return value if flag is None else flag

    if field_type == FieldType.DATE:
        parsed = coerce_date(value)
        return value if parsed is None else parsed

    return value


def parse_filter_value(
    value: Any,
    type: Union[FieldType, str, None] = FieldType.STRING,
    operator: Union[str, FilterOperator, None] = None,
) -> Any:
    """
    Convert a raw (usually typed-in) filter value to the condition's type.

    List operators and ARRAY conditions split comma-separated text into
    items; inRange parses each bound. Values that do not convert are
    returned unchanged.
    """
    if _is_blank(value):
        return value

    field_type = FieldType.parse(type) or FieldType.STRING
    op = parse_operator(operator)

    if op in LIST_OPERATORS or (field_type == FieldType.ARRAY and isinstance(value, str)):
        items = list(value) if isinstance(value, (list, tuple)) else _split_list(to_text(value))
        return [_parse_scalar(item, field_type) for item in items]

    if op == FilterOperator.IN_RANGE and isinstance(value, (list, tuple)):
        return [_parse_scalar(item, field_type) for item in value]

    return _parse_scalar(value, field_type)


def _prepare_field_value(value: Any, field_type: FieldType) -> Any:
    """Coerce a document value so it compares with a parsed filter value."""
    if value is None or field_type not in (FieldType.NUMBER, FieldType.DATE, FieldType.BOOLEAN):
        return value
    if isinstance(value, (list, dict)):
        return value
    return _parse_scalar(value, field_type)


@dataclass
class FilterCondition:
    """
    A single field/operator/value filter.

    A condition with an empty field, or whose value was never set, does
    not constrain anything.
    """
    field: str
    operator: str = FilterOperator.EQUALS.value
    value: Any = UNSET
    type: FieldType = FieldType.STRING

    def __post_init__(self):
        if isinstance(self.operator, FilterOperator):
            self.operator = self.operator.value
        self.type = FieldType.parse(self.type) or FieldType.STRING

    @property
    def is_vacuous(self) -> bool:
        return not self.field or self.value is UNSET

    @property
    def is_known_operator(self) -> bool:
        return parse_operator(self.operator) is not None

    def matches(self, document: Any) -> bool:
        """Evaluate the condition against a document."""
        if self.is_vacuous:
            return True

        filter_value = parse_filter_value(self.value, self.type, self.operator)
        field_value = _prepare_field_value(
            get_field_value(document, self.field),
            self.type,
        )
        return evaluate(field_value, self.operator, filter_value)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "field": self.field,
            "operator": self.operator,
            "type": self.type.value,
        }
        if self.value is not UNSET:
            data["value"] = self.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FilterCondition":
        return cls(
            field=data.get("field") or "",
            operator=data.get("operator") or FilterOperator.EQUALS.value,
            value=data.get("value", UNSET),
            type=data.get("type"),
        )

    def __repr__(self) -> str:
        return f"FilterCondition({self.field} {self.operator} {self.value!r})"


ConditionLike = Union[FilterCondition, Mapping[str, Any]]


def as_condition(item: ConditionLike) -> FilterCondition:
    """Accept a FilterCondition or its dictionary form."""
    if isinstance(item, FilterCondition):
        return item
    return FilterCondition.from_dict(item)


class FilterSet:
    """
    Conditions combined with AND or OR logic.

    Example:
        >>> filters = FilterSet(
        ...     [{"field": "city", "operator": "equals", "value": "Oslo"},
        ...      {"field": "city", "operator": "equals", "value": "Bergen"}],
        ...     logic="OR",
        ... )
        >>> nordic = filters.apply(documents)
    """

    def __init__(
        self,
        conditions: Optional[Iterable[ConditionLike]] = None,
        logic: Union[FilterLogic, str] = FilterLogic.AND,
    ):
        self.conditions: List[FilterCondition] = [
            as_condition(c) for c in (conditions or [])
        ]
        self.logic = FilterLogic.parse(logic)

    def __len__(self) -> int:
        return len(self.conditions)

    def matches(self, document: Any) -> bool:
        """Whether a single document passes the filter set."""
        if not self.conditions:
            return True
        if self.logic == FilterLogic.OR:
            return any(c.matches(document) for c in self.conditions)
        return all(c.matches(document) for c in self.conditions)

    def unknown_operators(self) -> List[str]:
        """Operators of active conditions that are not recognized."""
        return [
            c.operator for c in self.conditions
            if not c.is_vacuous and not c.is_known_operator
        ]

    def apply(self, documents: Sequence[Any]) -> List[Any]:
        """
        Filter a document collection.

        Args:
            documents: Documents or ``{"doc": ...}`` rows (not modified)

        Returns:
            Matching documents in their original order
        """
        validate_documents(documents)

        if not self.conditions:
            return list(documents)

        for operator in sorted(set(self.unknown_operators())):
            logger.warning(
                f"Unknown filter operator {operator!r}; condition passes every document"
            )

        return [document for document in documents if self.matches(document)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "logic": self.logic.value,
            "conditions": [c.to_dict() for c in self.conditions],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FilterSet":
        return cls(data.get("conditions") or [], data.get("logic"))

    def __repr__(self) -> str:
        return f"FilterSet({self.logic.value}, {self.conditions})"


def apply_filters(
    documents: Sequence[Any],
    conditions: Optional[Iterable[ConditionLike]],
    logic: Union[FilterLogic, str] = FilterLogic.AND,
) -> List[Any]:
    """
    Filter documents by a list of conditions.

    Args:
        documents: Documents to filter
        conditions: FilterCondition objects or dicts
        logic: "AND" (every condition) or "OR" (at least one)

    Returns:
        Matching documents in their original order
    """
    return FilterSet(conditions, logic).apply(documents)
