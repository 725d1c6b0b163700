"""
Input validation utilities.

These guard against programming errors at the engine boundary. They are
not used for user-entered filter or query input, which degrades
silently instead.
"""

from typing import Any, List, Optional, Sequence
import re

from ..core.exceptions import ValidationError


# Saved-query IDs: alphanumeric, underscores, hyphens
ID_PATTERN = re.compile(r'^[a-zA-Z0-9_\-]+$')

# Maximum limits
MAX_ID_LENGTH = 128
MAX_PAGE_SIZE = 100000


def validate_documents(documents: Optional[Sequence[Any]]) -> Sequence[Any]:
    """
    Validate a document collection.

    Args:
        documents: The collection to validate

    Returns:
        The collection unchanged

    Raises:
        ValidationError: If the collection is None or not a sequence
    """
    if documents is None:
        raise ValidationError("Document collection cannot be None")

    if isinstance(documents, (str, bytes)) or isinstance(documents, dict):
        raise ValidationError(
            f"Documents must be a sequence, got {type(documents).__name__}"
        )

    if not hasattr(documents, "__iter__"):
        raise ValidationError(
            f"Documents must be a sequence, got {type(documents).__name__}"
        )

    return documents


def validate_page(page: int) -> int:
    """
    Validate a 1-based page number.

    Raises:
        ValidationError: If page is not an integer >= 1
    """
    if isinstance(page, bool) or not isinstance(page, int):
        raise ValidationError(f"Page must be an integer, got {type(page).__name__}")

    if page < 1:
        raise ValidationError(f"Page must be at least 1, got {page}")

    return page


def validate_page_size(page_size: int, max_size: int = MAX_PAGE_SIZE) -> int:
    """
    Validate a page size.

    Raises:
        ValidationError: If page_size is not an integer in [1, max_size]
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise ValidationError(
            f"Page size must be an integer, got {type(page_size).__name__}"
        )

    if page_size < 1:
        raise ValidationError(f"Page size must be at least 1, got {page_size}")

    if page_size > max_size:
        raise ValidationError(f"Page size too large: {page_size} (max {max_size})")

    return page_size


def validate_query_id(id: str) -> str:
    """
    Validate a saved-query ID.

    Raises:
        ValidationError: If ID is empty, too long or has invalid characters
    """
    if not isinstance(id, str):
        raise ValidationError(f"ID must be a string, got {type(id).__name__}")

    if not id:
        raise ValidationError("ID cannot be empty")

    if len(id) > MAX_ID_LENGTH:
        raise ValidationError(
            f"ID too long: {len(id)} characters (max {MAX_ID_LENGTH})"
        )

    if not ID_PATTERN.match(id):
        raise ValidationError(
            f"Invalid ID '{id}': must contain only alphanumeric characters, "
            "underscores or hyphens"
        )

    return id


def validate_records(records: Any) -> List[dict]:
    """
    Validate an imported list of saved-query records.

    Raises:
        ValidationError: If records is not a list of dictionaries, or a
            record carries an invalid ID
    """
    if not isinstance(records, list):
        raise ValidationError(
            f"Imported data must be a list, got {type(records).__name__}"
        )

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValidationError(
                f"Record {index} must be a dictionary, got {type(record).__name__}"
            )
        if record.get("id") not in (None, ""):
            validate_query_id(str(record["id"]))

    return records
