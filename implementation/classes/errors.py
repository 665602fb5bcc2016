"""Exception types raised by the store adapter."""

from implementation.classes.enums import StoreErrorKind


class StoreError(Exception):
    """
    A database failure tagged with an explicit kind.

    Raised by db.postgres after translating the underlying psycopg exception,
    so callers branch on ``kind`` instead of inspecting vendor error codes.
    """

    def __init__(self, kind: StoreErrorKind, message: str = "") -> None:
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message or kind.value

    def __repr__(self) -> str:
        return f"StoreError(kind={self.kind.value!r}, message={self.message!r})"
