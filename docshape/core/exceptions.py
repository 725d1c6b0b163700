"""
Custom exceptions for docshape.

Malformed filter, sort and query input never raises; these exceptions
are reserved for programming errors and storage failures.
"""


class DocShapeError(Exception):
    """Base exception for docshape."""
    pass


class ValidationError(DocShapeError):
    """Input validation error (precondition violation)."""
    pass


class QueryParseError(DocShapeError):
    """Query text or dictionary could not be parsed."""
    pass


class StorageError(DocShapeError):
    """Error related to saved-query storage."""
    pass


class QueryNotFoundError(StorageError):
    """Saved query with given ID not found."""
    pass


class SerializationError(StorageError):
    """Error during serialization/deserialization."""
    pass
