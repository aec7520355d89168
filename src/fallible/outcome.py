"""Outcome: a computation that may fail, reified as a value.

An ``Outcome[T]`` is exactly one of two variants:

- ``Succeeded(value)``, holding the produced value;
- ``Failed(error)``, holding the recoverable exception the computation raised.

Build one from a zero-argument callable with ``Outcome.of`` and chain the
remaining steps with combinators. Every combinator returns a new outcome and
contains recoverable errors raised by the callbacks it runs, so a pipeline
only surfaces an exception where the caller asks for one (``get`` or
``checked_get``). To chain N fallible steps use N - 1 ``flat_map`` calls and
one final ``map``::

    x.flat_map(lambda a: y.flat_map(lambda b: z.map(lambda c: a + b + c)))

Fatal conditions (``MemoryError``, ``RecursionError``, anything that is not
an ``Exception``, plus configured extras) are never captured. Misuse, such
as passing ``None`` where a callable is required, raises ``MisuseError``
immediately instead of producing a ``Failed``.

Both variants support structural pattern matching::

    match Outcome.of(lambda: int(text)):
        case Succeeded(n):
            ...
        case Failed(err):
            ...
"""

from __future__ import annotations

import dataclasses
import functools
import logging
import typing
from typing import Any, Final, final, overload

from fallible._validation import (
    _require,
    _require_callable,
    _require_closable,
    _require_zero_arg_callable,
)
from fallible.config import current_config
from fallible.errors import (
    GetOfFailureError,
    NoSuchValueError,
    UnsupportedOperationError,
)
from fallible.resource import use

if typing.TYPE_CHECKING:
    from collections.abc import Callable

    from fallible.producer import Closable, FallibleFunction, FallibleProducer

log = logging.getLogger(__name__)

_VARIANTS: Final[frozenset[str]] = frozenset({"Succeeded", "Failed"})
_MISSING: Final = object()


def _contain(exc: Exception) -> None:
    """Re-raise *exc* when it is fatal; otherwise it may become a ``Failed``."""
    if current_config().is_fatal(exc):
        raise exc
    log.debug("Captured %s into Failed", type(exc).__name__)


def _fail(exc: Exception) -> Failed[Any]:
    """Wrap a library-built error, raising it instead when it is configured fatal."""
    _contain(exc)
    return Failed(exc)


def _capture[U](thunk: Callable[[], U]) -> Outcome[U]:
    try:
        value = thunk()
    except Exception as exc:
        _contain(exc)
        return Failed(exc)
    return Succeeded(value)


def _capture_outcome[U](thunk: Callable[[], Outcome[U]], field_name: str) -> Outcome[U]:
    """Run a callback that must itself return an Outcome."""
    try:
        result = thunk()
    except Exception as exc:
        _contain(exc)
        return Failed(exc)
    _require(
        condition=isinstance(result, Outcome),
        message=f"must return an Outcome, got {type(result).__name__}",
        field_name=field_name,
    )
    return result


class Outcome[T]:
    """Base of the closed ``Succeeded | Failed`` sum type.

    Not instantiable and not extensible: the only subclasses are the two
    variants defined in this module.
    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__ or cls.__name__ not in _VARIANTS:
            raise TypeError(
                f"Outcome is closed; {cls.__qualname__} cannot extend it "
                "(the only variants are Succeeded and Failed)"
            )

    def __new__(cls, *args: Any, **kwargs: Any) -> Any:
        if cls is Outcome:
            raise TypeError(
                "Outcome cannot be instantiated directly; use Outcome.of, "
                "Succeeded or Failed"
            )
        return super().__new__(cls)

    # --- Construction ---

    @overload
    @staticmethod
    def of[U](producer: FallibleProducer[U], /) -> Outcome[U]: ...

    @overload
    @staticmethod
    def of[R: Closable, U](resource: R, fn: FallibleFunction[R, U], /) -> Outcome[U]: ...

    @staticmethod
    def of(producer_or_resource: Any, fn: Any = _MISSING, /) -> Outcome[Any]:
        """Invoke a fallible computation once and reify its result.

        ``Outcome.of(producer)`` calls ``producer()``.

        ``Outcome.of(resource, fn)`` calls ``fn(resource)`` and closes
        *resource* exactly once afterwards, whatever happens; see
        ``fallible.resource`` for the release-failure policy.

        Returns:
            ``Succeeded(value)`` on normal return, ``Failed(error)`` when a
            recoverable exception was raised.

        Raises:
            MisuseError: If the producer, resource or function is missing or
                has the wrong shape.
            BaseException: Fatal conditions propagate unchanged.
        """
        if fn is _MISSING:
            _require_zero_arg_callable(producer_or_resource, "producer")
            return _capture(producer_or_resource)
        resource = producer_or_resource
        # Validate both before touching the resource so misuse never leaks it open.
        _require_closable(resource, "resource")
        _require_callable(fn, "fn")
        return _capture(functools.partial(use, resource, fn))

    # --- Inspection ---

    def is_success(self) -> bool:
        """Return True for ``Succeeded``."""
        raise NotImplementedError

    def is_failure(self) -> bool:
        """Return True for ``Failed``."""
        raise NotImplementedError

    # --- Retrieval ---

    def get(self) -> T:
        """Return the value, or raise ``GetOfFailureError`` chained from the error."""
        raise NotImplementedError

    def checked_get(self) -> T:
        """Return the value, or re-raise the captured error itself."""
        raise NotImplementedError

    def get_or_else(self, default: T) -> T:
        """Return the value, or *default* for ``Failed``. Never raises."""
        raise NotImplementedError

    def or_else(self, default: Outcome[T]) -> Outcome[T]:
        """Return self when succeeded, otherwise *default*."""
        raise NotImplementedError

    def to_optional(self) -> T | None:
        """Return the value, or None for ``Failed``.

        ``Succeeded(None).to_optional()`` is also None; use ``is_success``
        when None is a meaningful value.
        """
        raise NotImplementedError

    # --- Combinators ---

    def for_each(self, action: Callable[[T], object]) -> None:
        """Call *action* with the value; do nothing for ``Failed``.

        Exceptions raised by *action* propagate.
        """
        raise NotImplementedError

    def map[U](self, fn: Callable[[T], U]) -> Outcome[U]:
        """Apply *fn* to the value, capturing its errors."""
        raise NotImplementedError

    def flat_map[U](self, fn: Callable[[T], Outcome[U]]) -> Outcome[U]:
        """Apply an Outcome-returning *fn* to the value, capturing its errors."""
        raise NotImplementedError

    def filter(self, predicate: Callable[[T], bool]) -> Outcome[T]:
        """Keep the value only if *predicate* holds.

        A false predicate yields ``Failed(NoSuchValueError)``; an exception
        raised by the predicate yields ``Failed`` of that exception.
        """
        raise NotImplementedError

    def recover[U](self, fn: Callable[[Exception], U]) -> Outcome[T | U]:
        """Turn a failure into a value computed from the error."""
        raise NotImplementedError

    def recover_with[U](self, fn: Callable[[Exception], Outcome[U]]) -> Outcome[T | U]:
        """Turn a failure into another (possibly failed) Outcome."""
        raise NotImplementedError

    def failed(self) -> Outcome[Exception]:
        """Invert the outcome, exposing the error as the value."""
        raise NotImplementedError

    def transform[U](
        self,
        on_success: Callable[[T], Outcome[U]],
        on_failure: Callable[[Exception], Outcome[U]],
    ) -> Outcome[U]:
        """Eliminate both variants into a new Outcome.

        Exactly one branch runs. Recoverable errors raised by the branch
        become ``Failed``.
        """
        raise NotImplementedError


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Succeeded[T](Outcome[T]):
    """The successful result of a computation."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def get(self) -> T:
        return self.value

    def checked_get(self) -> T:
        return self.value

    def get_or_else(self, default: T) -> T:
        return self.value

    def or_else(self, default: Outcome[T]) -> Outcome[T]:
        _require_outcome(default, "default")
        return self

    def to_optional(self) -> T | None:
        return self.value

    def for_each(self, action: Callable[[T], object]) -> None:
        _require_callable(action, "action")
        action(self.value)

    def map[U](self, fn: Callable[[T], U]) -> Outcome[U]:
        _require_callable(fn, "fn")
        return _capture(lambda: fn(self.value))

    def flat_map[U](self, fn: Callable[[T], Outcome[U]]) -> Outcome[U]:
        _require_callable(fn, "fn")
        return _capture_outcome(lambda: fn(self.value), "fn")

    def filter(self, predicate: Callable[[T], bool]) -> Outcome[T]:
        _require_callable(predicate, "predicate")
        try:
            holds = predicate(self.value)
        except Exception as exc:
            _contain(exc)
            return Failed(exc)
        if holds:
            return self
        return _fail(NoSuchValueError(f"Predicate does not hold for {self.value!r}"))

    def recover[U](self, fn: Callable[[Exception], U]) -> Outcome[T | U]:
        _require_callable(fn, "fn")
        return self

    def recover_with[U](self, fn: Callable[[Exception], Outcome[U]]) -> Outcome[T | U]:
        _require_callable(fn, "fn")
        return self

    def failed(self) -> Outcome[Exception]:
        return _fail(UnsupportedOperationError("Succeeded.failed"))

    def transform[U](
        self,
        on_success: Callable[[T], Outcome[U]],
        on_failure: Callable[[Exception], Outcome[U]],
    ) -> Outcome[U]:
        _require_callable(on_success, "on_success")
        _require_callable(on_failure, "on_failure")
        return _capture_outcome(lambda: on_success(self.value), "on_success")


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Failed[T](Outcome[T]):
    """The failed result of a computation, holding a recoverable error."""

    error: Exception

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.error, Exception),
            message=f"must be an Exception instance, got {type(self.error).__name__}",
            field_name="error",
        )
        _require(
            condition=not current_config().is_fatal(self.error),
            message=f"{type(self.error).__name__} is fatal and cannot be captured",
            field_name="error",
        )

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def get(self) -> T:
        raise GetOfFailureError(self.error) from self.error

    def checked_get(self) -> T:
        raise self.error

    def get_or_else(self, default: T) -> T:
        return default

    def or_else(self, default: Outcome[T]) -> Outcome[T]:
        _require_outcome(default, "default")
        return default

    def to_optional(self) -> T | None:
        return None

    def for_each(self, action: Callable[[T], object]) -> None:
        _require_callable(action, "action")

    def map[U](self, fn: Callable[[T], U]) -> Outcome[U]:
        _require_callable(fn, "fn")
        return typing.cast("Outcome[U]", self)

    def flat_map[U](self, fn: Callable[[T], Outcome[U]]) -> Outcome[U]:
        _require_callable(fn, "fn")
        return typing.cast("Outcome[U]", self)

    def filter(self, predicate: Callable[[T], bool]) -> Outcome[T]:
        _require_callable(predicate, "predicate")
        return self

    def recover[U](self, fn: Callable[[Exception], U]) -> Outcome[T | U]:
        _require_callable(fn, "fn")
        return _capture(lambda: fn(self.error))

    def recover_with[U](self, fn: Callable[[Exception], Outcome[U]]) -> Outcome[T | U]:
        _require_callable(fn, "fn")
        return _capture_outcome(lambda: fn(self.error), "fn")

    def failed(self) -> Outcome[Exception]:
        return Succeeded(self.error)

    def transform[U](
        self,
        on_success: Callable[[T], Outcome[U]],
        on_failure: Callable[[Exception], Outcome[U]],
    ) -> Outcome[U]:
        _require_callable(on_success, "on_success")
        _require_callable(on_failure, "on_failure")
        return _capture_outcome(lambda: on_failure(self.error), "on_failure")


def _require_outcome(value: object, field_name: str) -> None:
    _require(
        condition=isinstance(value, Outcome),
        message=f"must be an Outcome, got {type(value).__name__}",
        field_name=field_name,
    )


def capture[**P, T](fn: Callable[P, T]) -> Callable[P, Outcome[T]]:
    """Decorate *fn* so each call returns an Outcome instead of raising.

    Example:
        @capture
        def parse(text: str) -> int:
            return int(text)

        parse("42")    # Succeeded(value=42)
        parse("forty") # Failed(error=ValueError(...))
    """
    _require_callable(fn, "fn")

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Outcome[T]:
        return _capture(lambda: fn(*args, **kwargs))

    return wrapper


__all__ = ["Failed", "Outcome", "Succeeded", "capture"]
