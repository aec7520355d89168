"""Scoped acquisition: run a function against a resource, then close it.

Release policy ("primary outcome wins"):

- ``close()`` is called exactly once, on every exit path, including when the
  body raises a fatal condition.
- A recoverable error raised by ``close()`` never replaces the body's result
  or error. It is logged on this module's logger at the configured
  ``release_log_level`` and, when the body raised, attached to that error as
  an exception note.
- A fatal condition raised by ``close()`` always propagates.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING

from fallible._validation import _require_callable, _require_closable
from fallible.config import current_config

if TYPE_CHECKING:
    from collections.abc import Generator

    from fallible.producer import Closable, FallibleFunction

log = logging.getLogger(__name__)


def _release(resource: Closable, primary: BaseException | None) -> None:
    """Close *resource*, reporting a recoverable close failure without raising it."""
    try:
        resource.close()
    except Exception as exc:
        config = current_config()
        if config.is_fatal(exc):
            raise
        if primary is None:
            log.log(
                config.release_log_level,
                "Release of %r failed after a successful call; keeping the result",
                resource,
                exc_info=exc,
            )
            return
        primary.add_note(f"release of {resource!r} also failed: {exc!r}")
        log.log(
            config.release_log_level,
            "Release of %r failed while %s was propagating",
            resource,
            type(primary).__name__,
            exc_info=exc,
        )


@contextmanager
def released[R: Closable](resource: R) -> Generator[R]:
    """Yield *resource* and close it exactly once when the block exits.

    Example:
        with released(open_connection()) as conn:
            rows = conn.execute(query)

    Raises:
        MisuseError: If *resource* is None or has no callable ``close``.
    """
    _require_closable(resource, "resource")
    try:
        yield resource
    except BaseException as primary:
        _release(resource, primary)
        raise
    else:
        _release(resource, None)


def use[R: Closable, T](resource: R, fn: FallibleFunction[R, T]) -> T:
    """Return ``fn(resource)``, closing *resource* afterwards under the release policy.

    Errors from *fn* propagate unchanged after release; capturing them is
    the caller's business (see ``Outcome.of``).
    """
    _require_closable(resource, "resource")
    _require_callable(fn, "fn")
    with released(resource) as r:
        return fn(r)
