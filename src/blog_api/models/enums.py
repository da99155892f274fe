"""
Enum definitions for the Blog Posts API
"""

from enum import Enum

class ErrorType(str, Enum):
    """
    Failure categories reported by the service layer.

    - VALIDATION_ERROR: a required input field is missing or empty (HTTP 400)
    - RESOURCE_NOT_FOUND: the referenced post id does not exist (HTTP 404)
    - DATABASE_ERROR: the underlying data access failed (HTTP 500)
    """
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"

class PredicateKind(str, Enum):
    """Filter predicates the post list query can be composed from"""
    SEARCH = "search"
    CATEGORY = "category"
