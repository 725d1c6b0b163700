"""
Mango-style query construction from visual condition lists.

Turns rows of (field, operator, value) text entered in a query builder
into a QueryDescriptor: a store-agnostic ``selector``/``fields``/
``sort``/``limit`` object ready to hand to the document store.

Example:
    >>> builder = QuerySelectorBuilder()
    >>> query = builder.build(
    ...     [{"field": "age", "operator": "$gt", "value": "25"}],
    ...     QueryOptions(fields=["name", "age"], sort={"field": "age", "direction": "desc"}),
    ... )
    >>> query.to_dict()
    {'selector': {'age': {'$gt': 25}}, 'limit': 25, 'fields': ['name', 'age'], 'sort': [{'age': 'desc'}]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..core.types import UNSET, SortDirection, SortKey
from ..utils.coercion import coerce_boolean, coerce_integer, coerce_number, to_text
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Row count used when the caller does not choose one
DEFAULT_LIMIT = 25

# "No limit" still needs a concrete integer for the store
UNBOUNDED_LIMIT = 1_000_000

UNBOUNDED_TOKENS = frozenset({"unbounded", "none", "all", "nolimit", "no_limit"})


class SelectorOperator(str, Enum):
    """Selector operators offered by the query builder."""

    # Equality
    EQ = "$eq"          # literal assignment
    NE = "$ne"

    # Ordering
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"

    # Lists (comma separated input)
    IN = "$in"
    NIN = "$nin"
    ALL = "$all"

    # Arrays and arithmetic
    SIZE = "$size"      # array length
    MOD = "$mod"        # "divisor, remainder"

    # Misc
    REGEX = "$regex"
    EXISTS = "$exists"  # "true"/"false"
    TYPE = "$type"


LIST_OPERATORS = frozenset({"$in", "$nin", "$all"})

# Operators whose value is always passed through as text
TEXT_OPERATORS = frozenset({"$regex", "$type"})


def normalize_operator(operator: Any) -> str:
    """Operator token with its ``$`` prefix (``"gt"`` -> ``"$gt"``)."""
    if isinstance(operator, SelectorOperator):
        return operator.value
    text = str(operator or "").strip()
    if not text:
        return SelectorOperator.EQ.value
    return text if text.startswith("$") else f"${text}"


@dataclass
class QueryCondition:
    """One row of the visual query builder."""
    field: str
    operator: str = SelectorOperator.EQ.value
    value: Any = ""

    def __post_init__(self):
        self.operator = normalize_operator(self.operator)

    @property
    def is_blank(self) -> bool:
        return (
            not self.field
            or self.value is None
            or self.value is UNSET
            or (isinstance(self.value, str) and self.value == "")
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QueryCondition":
        return cls(
            field=data.get("field") or "",
            operator=data.get("operator"),
            value=data.get("value", ""),
        )


def _as_query_condition(item: Union[QueryCondition, Mapping[str, Any]]) -> QueryCondition:
    if isinstance(item, QueryCondition):
        return item
    return QueryCondition.from_dict(item)


def _as_sort_keys(sort: Any) -> List[SortKey]:
    if sort is None:
        return []
    if isinstance(sort, (SortKey, Mapping)):
        sort = [sort]
    keys = []
    for item in sort:
        key = item if isinstance(item, SortKey) else SortKey.from_dict(item)
        if key.field:
            keys.append(key)
    return keys


def _freeze(value: Any) -> Any:
    """Read-only copy: mappings become mapping proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    """Plain dict/list copy of a frozen value."""
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_thaw(item) for item in value]
    return value


@dataclass
class QueryOptions:
    """
    Projection, ordering and size options for a query.

    Attributes:
        fields: Fields to return; empty means all fields
        sort: A sort key (SortKey or ``{"field", "direction"}``) or a list of them
        limit: Row limit; UNSET uses the builder default, None or
            ``"unbounded"`` requests every row
    """
    fields: List[str] = field(default_factory=list)
    sort: Any = None
    limit: Any = UNSET

    def __post_init__(self):
        self.fields = [f for f in (self.fields or []) if f]
        self.sort = _as_sort_keys(self.sort)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QueryOptions":
        return cls(
            fields=list(data.get("fields") or []),
            sort=data.get("sort"),
            limit=data.get("limit", UNSET),
        )


@dataclass(frozen=True)
class QueryDescriptor:
    """
    A structured, immutable query.

    ``selector`` maps fields to literals or operator mappings. ``fields``
    and ``sort`` are None when not requested.
    """
    selector: Mapping[str, Any]
    limit: int
    fields: Optional[Tuple[str, ...]] = None
    sort: Optional[Tuple[Tuple[str, str], ...]] = None

    def __post_init__(self):
        object.__setattr__(self, "selector", _freeze(self.selector))
        if self.fields is not None:
            object.__setattr__(self, "fields", tuple(self.fields))
        if self.sort is not None:
            object.__setattr__(
                self,
                "sort",
                tuple((name, SortDirection.parse(direction).value) for name, direction in self.sort),
            )

    def to_dict(self) -> Dict[str, Any]:
        """Mango-shaped dictionary (a fresh copy)."""
        result: Dict[str, Any] = {
            "selector": _thaw(self.selector),
            "limit": self.limit,
        }
        if self.fields:
            result["fields"] = list(self.fields)
        if self.sort:
            result["sort"] = [{name: direction} for name, direction in self.sort]
        return result

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        default_limit: int = DEFAULT_LIMIT,
    ) -> "QueryDescriptor":
        """
        Build a descriptor from a Mango-shaped dictionary.

        Sort entries may be ``{"field": "asc"|"desc"}`` mappings or bare
        field names (ascending).
        """
        limit = coerce_integer(data.get("limit"))
        if limit is None or limit < 1:
            limit = default_limit

        fields = [f for f in (data.get("fields") or []) if isinstance(f, str) and f]

        sort: List[Tuple[str, str]] = []
        for item in data.get("sort") or []:
            if isinstance(item, str):
                sort.append((item, SortDirection.ASC.value))
            elif isinstance(item, Mapping):
                for name, direction in item.items():
                    sort.append((name, SortDirection.parse(direction).value))

        return cls(
            selector=dict(data.get("selector") or {}),
            limit=limit,
            fields=tuple(fields) or None,
            sort=tuple(sort) or None,
        )


class QuerySelectorBuilder:
    """
    Builds QueryDescriptors from query-builder rows.

    Rows with an empty field or value are skipped, and rows whose value
    cannot be translated (``$mod`` without two integers, ``$size``
    without an integer) are dropped. Neither raises.
    """

    def __init__(
        self,
        default_limit: int = DEFAULT_LIMIT,
        unbounded_limit: int = UNBOUNDED_LIMIT,
    ):
        self.default_limit = default_limit
        self.unbounded_limit = unbounded_limit

    @classmethod
    def from_settings(cls, settings) -> "QuerySelectorBuilder":
        """Create a builder from ``config.Settings``."""
        return cls(
            default_limit=settings.query_config.default_limit,
            unbounded_limit=settings.query_config.unbounded_limit,
        )

    def build(
        self,
        conditions: Optional[Iterable[Union[QueryCondition, Mapping[str, Any]]]] = None,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
    ) -> QueryDescriptor:
        """
        Build a query descriptor.

        Args:
            conditions: QueryCondition objects or dicts
            options: QueryOptions or their dictionary form

        Returns:
            The QueryDescriptor
        """
        if options is None:
            options = QueryOptions()
        elif not isinstance(options, QueryOptions):
            options = QueryOptions.from_dict(options)

        sort = tuple(
            (key.field, key.direction.value) for key in options.sort
        )

        return QueryDescriptor(
            selector=self.build_selector(conditions or []),
            limit=self.resolve_limit(options.limit),
            fields=tuple(options.fields) or None,
            sort=sort or None,
        )

    def build_selector(
        self,
        conditions: Iterable[Union[QueryCondition, Mapping[str, Any]]],
    ) -> Dict[str, Any]:
        """Translate rows into a selector mapping; ``{}`` if none survive."""
        selector: Dict[str, Any] = {}

        for item in conditions:
            condition = _as_query_condition(item)
            if condition.is_blank:
                continue

            entry = self._translate(condition)
            if entry is UNSET:
                logger.debug(
                    f"Dropping condition on '{condition.field}': "
                    f"cannot translate {condition.value!r} for {condition.operator}"
                )
                continue

            existing = selector.get(condition.field)
            if _is_operator_mapping(existing) and _is_operator_mapping(entry):
                selector[condition.field] = {**existing, **entry}
            else:
                selector[condition.field] = entry

        return selector

    def _translate(self, condition: QueryCondition) -> Any:
        """Selector entry for one row, or UNSET to drop it."""
        op = condition.operator
        value = condition.value

        if op == SelectorOperator.EQ.value:
            return dict(value) if isinstance(value, Mapping) else value

        if op == SelectorOperator.EXISTS.value:
            return {op: coerce_boolean(value, default=False)}

        if op in LIST_OPERATORS:
            return {op: [_coerce_token(item) for item in _split_values(value)]}

        if op == SelectorOperator.MOD.value:
            numbers = [coerce_integer(item) for item in _split_values(value)]
            if len(numbers) != 2 or any(n is None for n in numbers):
                return UNSET
            return {op: numbers}

        if op == SelectorOperator.SIZE.value:
            size = coerce_integer(value)
            if size is None:
                return UNSET
            return {op: size}

        if op in TEXT_OPERATORS:
            return {op: to_text(value)}

        return {op: _coerce_token(value)}

    def resolve_limit(self, limit: Any) -> int:
        """Concrete row limit for a requested one."""
        if limit is UNSET:
            return self.default_limit
        if limit is None:
            return self.unbounded_limit
        if isinstance(limit, str) and limit.strip().lower() in UNBOUNDED_TOKENS:
            return self.unbounded_limit

        number = coerce_integer(limit)
        if number is None or number < 1:
            return self.default_limit
        return number


def _is_operator_mapping(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and bool(value)
        and all(isinstance(k, str) and k.startswith("$") for k in value)
    )


def _split_values(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [item.strip() for item in to_text(value).split(",")]


def _coerce_token(value: Any) -> Any:
    """Numeric value when the text parses as a number, else the value itself."""
    if isinstance(value, str):
        number = coerce_number(value)
        return value if number is None else number
    return value


def build_query(
    conditions: Optional[Iterable[Union[QueryCondition, Mapping[str, Any]]]] = None,
    options: Union[QueryOptions, Mapping[str, Any], None] = None,
    default_limit: int = DEFAULT_LIMIT,
    unbounded_limit: int = UNBOUNDED_LIMIT,
) -> QueryDescriptor:
    """
    Build a query descriptor with a one-off builder.

    Args:
        conditions: Query-builder rows
        options: Fields, sort and limit
        default_limit: Limit used when options do not set one
        unbounded_limit: Limit used for "no limit"

    Returns:
        The QueryDescriptor
    """
    builder = QuerySelectorBuilder(default_limit, unbounded_limit)
    return builder.build(conditions, options)
