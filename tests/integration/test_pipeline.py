"""
Integration tests for the document processing pipeline.

Exercises filtering, sorting and pagination together, the round trip
from query-builder rows to client-side filters, and saved views.
"""

import json
import pytest

from config import Settings, PaginationConfig
from docshape.core.types import FieldType
from docshape.query.executor import DocumentProcessor, process_documents
from docshape.query.inference import infer_field_type
from docshape.query.parser import conditions_from_selector, parse_query_text
from docshape.query.selector import QueryOptions, build_query
from docshape.query.filters import apply_filters
from docshape.storage import FileQueryStore, dump_filters, dump_sort_keys, load_filters, load_sort_keys


@pytest.fixture
def processor():
    return DocumentProcessor()


class TestPipeline:
    """Filter, sort and paginate together."""

    def test_numeric_strings_sort_numerically(self, orders, processor):
        """``total`` holds numeric strings and is inferred as a number."""
        assert infer_field_type(orders, "total") == FieldType.NUMBER

        items = []
        for page in (1, 2):
            result = processor.process(
                orders,
                filters=[{"field": "status", "operator": "equals", "value": "open"}],
                sort_keys=[{"field": "total", "direction": "asc"}],
                page=page,
                page_size=10,
            )
            assert result.total == 20
            items.extend(result.items)

        totals = [float(doc["total"]) for doc in items]
        assert totals == sorted(totals)
        assert len(items) == 20

    def test_page_beyond_end(self, orders, processor):
        result = processor.process(orders, page=100, page_size=25)
        assert result.items == []
        assert result.total == 60
        assert result.page.total_pages == 3
        assert not result.page.has_next

    def test_date_range(self, orders, processor):
        result = processor.process(
            orders,
            filters=[{
                "field": "created",
                "operator": "inRange",
                "value": ["2024-01-10", "2024-01-20"],
                "type": "date",
            }],
            page_size=100,
        )
        assert result.total == 22
        assert all("2024-01-10" <= doc["created"] <= "2024-01-20" for doc in result)

    def test_or_is_union(self, orders, processor):
        filters = [
            {"field": "status", "operator": "equals", "value": "cancelled"},
            {"field": "priority", "operator": "equals", "value": "0", "type": "number"},
        ]
        either = processor.process(orders, filters=filters, logic="OR", page_size=100)
        both = processor.process(orders, filters=filters, logic="AND", page_size=100)

        assert either.total == 30
        assert both.total == 5
        assert all(doc in either.items for doc in both.items)

    def test_multi_key_sort(self, orders, processor):
        result = processor.process(
            orders,
            sort_keys=[
                {"field": "status", "direction": "asc"},
                {"field": "total", "direction": "desc"},
            ],
            page_size=100,
        )

        pairs = [(doc["status"], float(doc["total"])) for doc in result]
        for (status_a, total_a), (status_b, total_b) in zip(pairs, pairs[1:]):
            assert status_a <= status_b
            if status_a == status_b:
                assert total_a >= total_b

    def test_stable_ties(self, orders, processor):
        result = processor.process(
            orders,
            sort_keys=[{"field": "priority"}],
            page_size=100,
        )
        for priority in range(4):
            ids = [doc["_id"] for doc in result if doc["priority"] == priority]
            assert ids == sorted(ids)

    def test_wrapped_rows(self, orders, processor):
        rows = [{"id": doc["_id"], "doc": doc} for doc in orders]
        filters = [{"field": "status", "operator": "equals", "value": "shipped"}]

        plain = processor.process(orders, filters=filters, page_size=100)
        wrapped = processor.process(rows, filters=filters, page_size=100)

        assert [row["id"] for row in wrapped] == [doc["_id"] for doc in plain]

    def test_fields_exclude_internal(self, orders, processor):
        result = processor.process(orders)
        assert result.fields == ["created", "priority", "status", "tags", "total"]

    def test_input_untouched(self, orders, processor):
        before = [dict(doc) for doc in orders]
        processor.process(
            orders,
            filters=[{"field": "total", "operator": "greaterThan", "value": "30", "type": "number"}],
            sort_keys=[{"field": "total", "direction": "desc"}],
        )
        assert orders == before

    def test_configured_page_size(self, orders):
        settings = Settings(pagination_config=PaginationConfig(items_per_page=7))
        result = DocumentProcessor(settings).process(orders)
        assert len(result) == 7
        assert result.page.total_pages == 9

    def test_convenience_function(self, orders):
        result = process_documents(orders, page=3, page_size=25)
        assert len(result) == 10
        assert result.stats.documents_returned == 10


class TestQueryRoundTrip:
    """Builder rows to selector to client-side filters."""

    def test_build_parse_replay(self, orders):
        query = build_query(
            [
                {"field": "status", "operator": "$eq", "value": "shipped"},
                {"field": "priority", "operator": "$gte", "value": "2"},
            ],
            QueryOptions(fields=["status", "priority"], sort={"field": "priority", "direction": "desc"}),
        )
        assert query.to_dict()["selector"] == {"status": "shipped", "priority": {"$gte": 2}}

        parsed = parse_query_text(json.dumps(query.to_dict()))
        assert parsed == query

        matched = apply_filters(orders, conditions_from_selector(parsed.selector), "AND")
        assert len(matched) == 10
        assert all(doc["status"] == "shipped" and doc["priority"] >= 2 for doc in matched)


class TestSavedViews:
    """Filter and sort configuration stored alongside saved queries."""

    def test_view_survives_reload(self, orders, tmp_path):
        filters = [{"field": "status", "operator": "equals", "value": "open"}]
        sort_keys = [{"field": "total", "direction": "desc", "type": "number"}]

        store = FileQueryStore(tmp_path / "queries.msgpack", format="msgpack")
        saved = store.create({
            "name": "Open orders",
            "filters": dump_filters(filters),
            "sort": dump_sort_keys(sort_keys),
        })

        reopened = FileQueryStore(tmp_path / "queries.msgpack", format="msgpack")
        record = reopened.get(saved.id)

        processor = DocumentProcessor()
        expected = processor.process(orders, filters=filters, sort_keys=sort_keys)
        restored = processor.process(
            orders,
            filters=load_filters(record.attributes["filters"]),
            sort_keys=load_sort_keys(record.attributes["sort"]),
        )
        assert restored.items == expected.items
