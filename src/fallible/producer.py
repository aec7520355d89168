"""Capability protocols accepted by ``Outcome.of``.

These are structural: any zero-argument callable is a ``FallibleProducer``,
any one-argument callable a ``FallibleFunction``, and any object with a
``close()`` method a ``Closable`` (files, sockets, ``sqlite3`` connections,
``urllib`` responses, ...).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FallibleProducer[T](Protocol):
    """A zero-argument operation that yields a ``T`` or raises."""

    def __call__(self) -> T: ...


@runtime_checkable
class FallibleFunction[R, T](Protocol):
    """A one-argument operation over a scoped resource that yields a ``T`` or raises."""

    def __call__(self, resource: R, /) -> T: ...


@runtime_checkable
class Closable(Protocol):
    """A resource released by an explicit ``close()`` call."""

    def close(self) -> None: ...
