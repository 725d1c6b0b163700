"""
Pytest fixtures for docshape tests.
"""

import pytest
from typing import Any, Dict, List

from docshape.core.types import SortKey


@pytest.fixture
def people() -> List[Dict[str, Any]]:
    """Small heterogeneous collection of people."""
    return [
        {"_id": "p1", "_rev": "1-a", "name": "alice", "age": 30, "city": "Oslo", "active": True},
        {"_id": "p2", "_rev": "1-b", "name": "Bob", "age": 25, "city": "Bergen", "active": False},
        {"_id": "p3", "_rev": "1-c", "name": "carol", "age": 35, "city": "Oslo", "active": True},
        {"_id": "p4", "_rev": "1-d", "name": "dave", "age": None, "city": "Trondheim"},
        {"_id": "p5", "_rev": "1-e", "name": "Eve", "age": 25, "city": "", "joined": "2023-05-01"},
    ]


@pytest.fixture
def wrapped_people(people) -> List[Dict[str, Any]]:
    """The same collection as ``{"id", "doc"}`` rows."""
    return [{"id": p["_id"], "key": p["_id"], "doc": p} for p in people]


@pytest.fixture
def orders() -> List[Dict[str, Any]]:
    """Generated order documents for pipeline tests."""
    statuses = ["open", "shipped", "cancelled"]
    docs = []
    for i in range(60):
        docs.append({
            "_id": f"order_{i:03d}",
            "status": statuses[i % len(statuses)],
            "total": str(10 + (i * 7) % 50),
            "created": f"2024-01-{(i % 28) + 1:02d}",
            "priority": i % 4,
            "tags": [f"t{j}" for j in range(i % 3)],
        })
    return docs


@pytest.fixture
def age_sort() -> SortKey:
    """Ascending numeric sort on age."""
    return SortKey(field="age", direction="asc", type="number")
