"""
Document processing pipeline for docshape.

Runs the client-side view over a fetched document collection:
filter, sort, then paginate.

Features:
- AND/OR filtering
- Multi-key sorting with types inferred over the full collection
- Pagination with page metadata
- Execution statistics
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
import time

from ..core.types import FilterLogic
from ..utils.logging import get_logger
from ..utils.validation import validate_documents
from .fields import INTERNAL_FIELD_PREFIX, extract_user_fields
from .filters import ConditionLike, FilterSet
from .inference import DEFAULT_SAMPLE_SIZE
from .paginator import PageInfo, page_info, paginate
from .sorter import SortKeyLike, resolve_sort_keys, sort_documents

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 25


@dataclass
class ExecutionStats:
    """
    Statistics from one pipeline run.
    """

    # Timing
    total_time_ms: float = 0.0
    filter_time_ms: float = 0.0
    sort_time_ms: float = 0.0
    paginate_time_ms: float = 0.0

    # Counts
    documents_scanned: int = 0
    documents_matched: int = 0
    documents_returned: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_time_ms": self.total_time_ms,
            "filter_time_ms": self.filter_time_ms,
            "sort_time_ms": self.sort_time_ms,
            "paginate_time_ms": self.paginate_time_ms,
            "documents_scanned": self.documents_scanned,
            "documents_matched": self.documents_matched,
            "documents_returned": self.documents_returned,
        }


@dataclass
class ProcessResult:
    """
    Result from a pipeline run.
    """

    # Documents on the requested page
    items: List[Any] = field(default_factory=list)

    # Filtered count (may be more than len(items))
    total: int = 0

    # User fields of the unfiltered collection
    fields: List[str] = field(default_factory=list)

    page: Optional[PageInfo] = None
    stats: Optional[ExecutionStats] = None

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": self.items,
            "total": self.total,
            "fields": self.fields,
            "page": self.page.to_dict() if self.page else None,
            "stats": self.stats.to_dict() if self.stats else None,
        }


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class DocumentProcessor:
    """
    Filters, sorts and paginates document collections.

    Example:
        >>> processor = DocumentProcessor()
        >>> result = processor.process(
        ...     documents,
        ...     filters=[{"field": "age", "operator": "greaterThan", "value": "30", "type": "number"}],
        ...     sort_keys=[{"field": "name", "direction": "asc"}],
        ...     page=1,
        ...     page_size=10,
        ... )
        >>> result.total, len(result.items)
    """

    def __init__(self, settings=None):
        """
        Initialize the processor.

        Args:
            settings: Optional ``config.Settings``; defaults are used when omitted
        """
        if settings is not None:
            self.internal_field_prefix = settings.engine_config.internal_field_prefix
            self.type_sample_size = settings.engine_config.type_sample_size
            self.field_sample_size = settings.engine_config.field_sample_size
            self.default_page_size = settings.pagination_config.items_per_page
        else:
            self.internal_field_prefix = INTERNAL_FIELD_PREFIX
            self.type_sample_size = DEFAULT_SAMPLE_SIZE
            self.field_sample_size = None
            self.default_page_size = DEFAULT_PAGE_SIZE

    def process(
        self,
        documents: Sequence[Any],
        filters: Optional[Iterable[ConditionLike]] = None,
        logic: Union[FilterLogic, str] = FilterLogic.AND,
        sort_keys: Optional[Iterable[SortKeyLike]] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> ProcessResult:
        """
        Run the pipeline.

        Sort key types are inferred over the full collection, not the
        filtered subset, so a key's type does not change as filters do.

        Args:
            documents: Documents or ``{"doc": ...}`` rows (not modified)
            filters: FilterCondition objects or dicts
            logic: "AND" or "OR"
            sort_keys: SortKey objects or dicts, highest priority first
            page: 1-based page number
            page_size: Documents per page; defaults to the configured size

        Returns:
            ProcessResult
        """
        validate_documents(documents)
        documents = list(documents)
        page_size = page_size or self.default_page_size

        stats = ExecutionStats(documents_scanned=len(documents))
        start_time = time.perf_counter()

        # Filter
        stage = time.perf_counter()
        filter_set = FilterSet(filters, logic)
        matched = filter_set.apply(documents)
        stats.filter_time_ms = _elapsed_ms(stage)
        stats.documents_matched = len(matched)

        # Sort
        stage = time.perf_counter()
        keys = resolve_sort_keys(documents, sort_keys or [], sample_size=self.type_sample_size)
        ordered = sort_documents(matched, keys)
        stats.sort_time_ms = _elapsed_ms(stage)

        # Paginate
        stage = time.perf_counter()
        items = paginate(ordered, page, page_size)
        info = page_info(len(ordered), page, page_size)
        stats.paginate_time_ms = _elapsed_ms(stage)
        stats.documents_returned = len(items)

        stats.total_time_ms = _elapsed_ms(start_time)

        logger.debug(
            f"Processed {stats.documents_scanned} documents: "
            f"{stats.documents_matched} matched, {stats.documents_returned} returned "
            f"in {stats.total_time_ms:.2f}ms"
        )

        return ProcessResult(
            items=items,
            total=len(ordered),
            fields=self.fields(documents),
            page=info,
            stats=stats,
        )

    def fields(self, documents: Sequence[Any]) -> List[str]:
        """User-facing field names of a collection."""
        return extract_user_fields(
            documents,
            prefix=self.internal_field_prefix,
            sample_size=self.field_sample_size,
        )


def process_documents(
    documents: Sequence[Any],
    filters: Optional[Iterable[ConditionLike]] = None,
    logic: Union[FilterLogic, str] = FilterLogic.AND,
    sort_keys: Optional[Iterable[SortKeyLike]] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ProcessResult:
    """
    Filter, sort and paginate documents with default settings.

    Args:
        documents: Document collection
        filters: Filter conditions
        logic: "AND" or "OR"
        sort_keys: Sort keys, highest priority first
        page: 1-based page number
        page_size: Documents per page

    Returns:
        ProcessResult
    """
    return DocumentProcessor().process(
        documents,
        filters=filters,
        logic=logic,
        sort_keys=sort_keys,
        page=page,
        page_size=page_size,
    )
