"""Error hierarchy for the typesync library.

Every error class inherits from :class:`TypeSyncError`.  Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

The builders are pure functions over their inputs, so the hierarchy is
small: bad snapshots handed to the entry point, and deltas that do not
follow the array/object encoding.  Delta shapes that are well-formed but
simply not acted upon are *not* errors; they are skipped and logged.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the library can raise."""

    MISSING_SNAPSHOT = "MISSING_SNAPSHOT"
    INVALID_SNAPSHOT = "INVALID_SNAPSHOT"
    MALFORMED_DELTA = "MALFORMED_DELTA"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class TypeSyncError(Exception):
    """Base exception for all typesync errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------

class TypeSyncInputError(TypeSyncError):
    """A snapshot passed to a builder is missing or not a mapping.

    Context keys: ``argument``, ``received_type``.
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.MISSING_SNAPSHOT,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Delta errors
# ---------------------------------------------------------------------------

class TypeSyncDeltaError(TypeSyncError):
    """A delta does not follow the array/object encoding.

    Raised for structurally broken input: a delta that is not a mapping,
    a leaf that is not a list, or a changed entry whose previous/next
    pair cannot be resolved.

    Context keys: ``key``, ``value``, ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_DELTA,
            message=message,
            context=context,
            cause=cause,
        )
