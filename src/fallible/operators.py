"""Binary operators lifted over Outcomes.

Each helper returns a function ``(Outcome[T], Outcome[T]) -> Outcome[T]``
that yields the first ``Failed`` operand, or applies the underlying
operation to both values with its errors captured. They are meant for
``functools.reduce``::

    total = reduce(lift(operator.add), outcomes)
    smallest = reduce(min_by(), outcomes)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fallible._validation import _require, _require_callable
from fallible.outcome import Outcome

if TYPE_CHECKING:
    from collections.abc import Callable

type BinaryOutcomeOperator[T] = Callable[[Outcome[T], Outcome[T]], Outcome[T]]


def _identity(value: Any) -> Any:
    return value


def lift[T](op: Callable[[T, T], T]) -> BinaryOutcomeOperator[T]:
    """Lift a plain binary operation to Outcomes.

    Raises:
        MisuseError: If *op* is None or not callable.
    """
    _require_callable(op, "op")

    def apply(a: Outcome[T], b: Outcome[T]) -> Outcome[T]:
        _require(
            condition=isinstance(a, Outcome) and isinstance(b, Outcome),
            message=(
                f"operands must be Outcomes, got {type(a).__name__} "
                f"and {type(b).__name__}"
            ),
        )
        return a.flat_map(lambda x: b.map(lambda y: op(x, y)))

    return apply


def min_by[T](key: Callable[[T], Any] | None = None) -> BinaryOutcomeOperator[T]:
    """Lifted selector for the lesser operand by *key*; ties keep the first."""
    k = _identity if key is None else key
    _require_callable(k, "key")
    return lift(lambda a, b: a if k(a) <= k(b) else b)


def max_by[T](key: Callable[[T], Any] | None = None) -> BinaryOutcomeOperator[T]:
    """Lifted selector for the greater operand by *key*; ties keep the first."""
    k = _identity if key is None else key
    _require_callable(k, "key")
    return lift(lambda a, b: a if k(a) >= k(b) else b)
