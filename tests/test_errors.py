from __future__ import annotations

import pytest

from fallible.errors import (
    ConfigurationError,
    FallibleError,
    GetOfFailureError,
    MisuseError,
    NoSuchValueError,
    UnsupportedOperationError,
)

pytestmark = pytest.mark.unit


def test_base_error_carries_optional_hint() -> None:
    err = FallibleError("boom", hint="do this")

    assert str(err) == "boom"
    assert err.hint == "do this"
    assert FallibleError("fail").hint is None


@pytest.mark.smoke
def test_subclass_hierarchy() -> None:
    """Every library error is catchable as FallibleError and its stdlib peer."""
    for cls in (
        ConfigurationError,
        GetOfFailureError,
        MisuseError,
        NoSuchValueError,
        UnsupportedOperationError,
    ):
        assert issubclass(cls, FallibleError)

    assert issubclass(MisuseError, TypeError)
    assert issubclass(NoSuchValueError, LookupError)


def test_get_of_failure_preserves_cause() -> None:
    cause = ValueError("bad number")

    err = GetOfFailureError(cause)

    assert err.cause is cause
    assert err.__cause__ is cause
    assert str(err) == GetOfFailureError.MESSAGE
