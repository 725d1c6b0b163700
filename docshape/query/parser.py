"""
Query parsing for docshape.

Parses hand-written or generated query text and dictionaries into
QueryDescriptors, and maps Mango selectors back onto filter conditions
so a stored query can be replayed client-side.

Supports:
- Full queries (``{"selector": ..., "fields": ..., "sort": ..., "limit": ...}``)
- Bare selectors (``{"age": {"$gt": 25}}``)
- JSON wrapped in Markdown code fences
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from ..core.exceptions import QueryParseError
from ..core.types import FieldType
from ..utils.logging import get_logger
from .filters import FilterCondition, FilterOperator
from .selector import DEFAULT_LIMIT, QueryDescriptor

logger = get_logger(__name__)

# Opening fence with an optional language tag, or a closing fence
CODE_FENCE = re.compile(r"```[A-Za-z0-9_-]*")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences and surrounding whitespace."""
    return CODE_FENCE.sub("", text).strip()


class QueryParser:
    """
    Parser for structured queries.

    Example:
        >>> parser = QueryParser()
        >>>
        >>> # Full query
        >>> query = parser.parse('{"selector": {"type": "user"}, "limit": 10}')
        >>>
        >>> # Bare selector
        >>> query = parser.parse({"age": {"$gt": 25}})
        >>> query.limit
        25
    """

    # Mango operator -> client-side filter operator
    OPERATORS = {
        "$eq": FilterOperator.EQUALS,
        "$ne": FilterOperator.NOT_EQUALS,
        "$gt": FilterOperator.GREATER_THAN,
        "$gte": FilterOperator.GREATER_THAN_OR_EQUAL,
        "$lt": FilterOperator.LESS_THAN,
        "$lte": FilterOperator.LESS_THAN_OR_EQUAL,
        "$in": FilterOperator.IN,
        "$nin": FilterOperator.NOT_IN,
        "$regex": FilterOperator.REGEX,
    }

    def __init__(self, default_limit: int = DEFAULT_LIMIT):
        self.default_limit = default_limit

    def parse(self, query: Union[Mapping[str, Any], str]) -> QueryDescriptor:
        """
        Parse a query from text or a dictionary.

        Args:
            query: JSON text (optionally fenced) or a dictionary

        Returns:
            QueryDescriptor

        Raises:
            QueryParseError: If the input is not a JSON object or the
                selector is not an object
        """
        if isinstance(query, str):
            return self._parse_text(query)
        return self._parse_dict(query)

    def _parse_text(self, text: str) -> QueryDescriptor:
        cleaned = strip_code_fences(text)
        if not cleaned:
            raise QueryParseError("Query text is empty")

        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise QueryParseError(f"Invalid query JSON: {e}") from e

        return self._parse_dict(data)

    def _parse_dict(self, data: Any) -> QueryDescriptor:
        if not isinstance(data, Mapping):
            raise QueryParseError(
                f"Query must be a JSON object, got {type(data).__name__}"
            )

        if "selector" not in data:
            # Bare selector
            return QueryDescriptor(selector=dict(data), limit=self.default_limit)

        if not isinstance(data["selector"], Mapping):
            raise QueryParseError(
                f"Selector must be an object, got {type(data['selector']).__name__}"
            )

        for key in ("fields", "sort"):
            if data.get(key) is not None and not isinstance(data[key], list):
                raise QueryParseError(f"'{key}' must be a list")

        return QueryDescriptor.from_dict(data, default_limit=self.default_limit)

    def conditions_from_selector(
        self,
        selector: Mapping[str, Any],
    ) -> List[FilterCondition]:
        """
        Map top-level selector clauses onto filter conditions.

        Literal values become ``equals`` conditions and a ``null`` literal
        becomes ``isNull``. ``$exists`` maps to ``isNotNull``/``isNull``.
        Combinators (``$and``, ``$or``, ...) and operators without a
        client-side equivalent are skipped.
        """
        conditions: List[FilterCondition] = []

        for field, clause in selector.items():
            if field.startswith("$"):
                logger.debug(f"Skipping unsupported combinator '{field}'")
                continue

            if clause is None:
                conditions.append(FilterCondition(field, FilterOperator.IS_NULL, True))
                continue

            if isinstance(clause, tuple):
                clause = list(clause)

            if not isinstance(clause, Mapping):
                conditions.append(
                    FilterCondition(field, FilterOperator.EQUALS, clause, _value_type(clause))
                )
                continue

            for op, value in clause.items():
                condition = self._parse_clause(field, op, value)
                if condition is None:
                    logger.debug(f"Skipping unsupported operator '{op}' on '{field}'")
                    continue
                conditions.append(condition)

        return conditions

    def _parse_clause(self, field: str, op: str, value: Any) -> Optional[FilterCondition]:
        if op == "$exists":
            operator = FilterOperator.IS_NOT_NULL if value else FilterOperator.IS_NULL
            # A blank value would only ever satisfy isNull
            return FilterCondition(field, operator, True)

        operator = self.OPERATORS.get(op)
        if operator is None:
            return None

        if isinstance(value, tuple):
            value = list(value)

        if operator == FilterOperator.REGEX:
            return FilterCondition(field, operator, str(value), FieldType.STRING)

        return FilterCondition(field, operator, value, _value_type(value))


def _value_type(value: Any) -> FieldType:
    """Field type implied by a selector literal."""
    if isinstance(value, (list, tuple)):
        items = [item for item in value if item is not None]
        if items and all(_value_type(item) == FieldType.NUMBER for item in items):
            return FieldType.NUMBER
        return FieldType.STRING
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, (int, float)):
        return FieldType.NUMBER
    return FieldType.STRING


# Convenience functions
def parse_query_text(text: str, default_limit: int = DEFAULT_LIMIT) -> QueryDescriptor:
    """
    Parse query text, such as hand-written JSON or generated output.

    Args:
        text: JSON object text, optionally inside ``` fences
        default_limit: Limit used when the query does not set one

    Returns:
        QueryDescriptor
    """
    return QueryParser(default_limit).parse(text)


def parse_query(data: Mapping[str, Any], default_limit: int = DEFAULT_LIMIT) -> QueryDescriptor:
    """
    Parse a query dictionary.

    Args:
        data: Full query or bare selector
        default_limit: Limit used when the query does not set one

    Returns:
        QueryDescriptor
    """
    return QueryParser(default_limit).parse(data)


def conditions_from_selector(selector: Mapping[str, Any]) -> List[FilterCondition]:
    """Map a selector's top-level field clauses onto filter conditions."""
    return QueryParser().conditions_from_selector(selector)
