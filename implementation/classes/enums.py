"""
Enum classes for the catalog data models.

This module contains the Enum classes shared by the store adapter, the
repositories and the HTTP layer.
"""

from enum import Enum


class StoreErrorKind(str, Enum):
    """Category of a failure raised by the relational store adapter."""
    DUPLICATE_KEY = "duplicate_key"
    REFERENTIAL_VIOLATION = "referential_violation"
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"


class CastLinkStatus(str, Enum):
    """Outcome of linking a single actor to a movie's cast."""
    LINKED = "linked"
    ALREADY_LINKED = "already_linked"
    FAILED = "failed"
