"""Exception hierarchy for fallible."""

from __future__ import annotations


class FallibleError(Exception):
    """Base exception for all fallible errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(FallibleError):
    """Configuration validation or resolution failed."""


class MisuseError(FallibleError, TypeError):
    """An API was called with arguments it can never accept.

    Raised immediately at the call boundary and never captured into a
    ``Failed`` outcome: a missing producer is a bug, not a failed computation.
    """


class GetOfFailureError(FallibleError):
    """``get()`` was called on a ``Failed`` outcome.

    The captured error is preserved both as ``__cause__`` (so tracebacks show
    it) and as the ``cause`` attribute for programmatic access.
    """

    MESSAGE = "get of a Failed outcome"

    def __init__(self, cause: BaseException) -> None:
        super().__init__(self.MESSAGE)
        self.cause = cause
        self.__cause__ = cause


class NoSuchValueError(FallibleError, LookupError):
    """A ``filter`` predicate did not hold for the held value."""


class UnsupportedOperationError(FallibleError):
    """The operation has no meaning for this variant (e.g. ``Succeeded.failed``)."""
