"""Internal validation helpers used at the public API boundary.

Every misuse check funnels through ``_require`` so that messages stay
consistent and always raise ``MisuseError`` unless told otherwise.
"""

from __future__ import annotations

import inspect
import typing

from fallible.errors import MisuseError


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = MisuseError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _require_callable(func: typing.Any, field_name: str) -> None:
    _require(
        condition=func is not None,
        message="must not be None",
        field_name=field_name,
    )
    _require(
        condition=callable(func),
        message=f"must be callable, got {type(func).__name__}",
        field_name=field_name,
    )


def _require_zero_arg_callable(func: typing.Any, field_name: str) -> None:
    """Validate callable takes no arguments so it can be invoked as ``func()``."""
    _require_callable(func, field_name)

    # Validate signature if introspectable
    try:
        sig = inspect.signature(func)
    except (ValueError, TypeError):
        # Builtins and some C callables expose no signature; acceptable
        return
    has_required_params = any(
        p.default is p.empty
        and p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)
        for p in sig.parameters.values()
    )
    _require(
        condition=not has_required_params,
        message="must be a zero-argument callable",
        field_name=field_name,
    )


def _require_closable(resource: typing.Any, field_name: str) -> None:
    _require(
        condition=resource is not None,
        message="must not be None",
        field_name=field_name,
    )
    _require(
        condition=callable(getattr(resource, "close", None)),
        message=f"must expose a callable close(), got {type(resource).__name__}",
        field_name=field_name,
    )
