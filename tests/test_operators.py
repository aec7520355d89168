"""Binary operators over Outcomes, reduced across collections."""

from __future__ import annotations

from functools import reduce
import operator

import pytest

from fallible import Failed, MisuseError, Outcome, Succeeded, lift, max_by, min_by
from tests.helpers import failure

pytestmark = pytest.mark.unit


def _successes(*values: object) -> list[Outcome[object]]:
    return [Outcome.of(lambda v=v: v) for v in values]


NUMBERS = (42, 5, 23, 16, 195, 2)
STRINGS = ("abcdefgh", "foobar", "dummy", "sample")


def test_min_over_successes() -> None:
    assert reduce(min_by(), _successes(*NUMBERS)) == Succeeded(2)


def test_max_over_successes() -> None:
    assert reduce(max_by(), _successes(*NUMBERS)) == Succeeded(195)


def test_sum_over_successes() -> None:
    assert reduce(lift(operator.add), _successes(*NUMBERS)) == Succeeded(283)


def test_min_with_a_failure_is_failed() -> None:
    failed = Outcome.of(failure)
    mixed = [*_successes(1, 2), failed, *_successes(3)]

    result = reduce(min_by(), mixed)

    assert result.is_failure()
    assert result is failed


def test_first_failure_wins() -> None:
    first, second = Failed(ValueError("first")), Failed(ValueError("second"))

    assert lift(operator.add)(first, second) is first
    assert lift(operator.add)(Succeeded(1), second) is second


def test_custom_key_success() -> None:
    result = reduce(min_by(lambda s: s[4]), _successes(*STRINGS))

    assert result == Succeeded("foobar")


def test_custom_key_failure_is_captured() -> None:
    # "dummy" is shorter than 6 characters, so the key raises IndexError
    result = reduce(min_by(lambda s: s[5]), _successes(*STRINGS))

    assert result.is_failure()
    assert isinstance(result.failed().get(), IndexError)


@pytest.mark.parametrize(
    ("selector", "expected"),
    [(min_by(len), "ab"), (max_by(len), "ab")],
)
def test_ties_keep_first_operand(selector, expected: str) -> None:
    assert selector(Succeeded("ab"), Succeeded("cd")) == Succeeded(expected)


def test_lift_rejects_missing_operation() -> None:
    with pytest.raises(MisuseError):
        lift(None)  # type: ignore[arg-type]


def test_lifted_operator_rejects_plain_operands() -> None:
    with pytest.raises(MisuseError, match="operands must be Outcomes"):
        lift(operator.add)(1, Succeeded(2))  # type: ignore[arg-type]
