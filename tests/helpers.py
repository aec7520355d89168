"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: the producers mirror the canonical
"42 or a parse error" computations used throughout the suite.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def success() -> int:
    return 42


def another_success() -> str:
    return "Hello World!"


def failure() -> int:
    return int("Number not valid")


@dataclass
class MockResource:
    """Closable double that records every close() call.

    Set ``close_error`` to make close() raise after recording the call.
    """

    name: str = "mock"
    close_error: BaseException | None = None
    close_calls: int = 0
    events: list[str] = field(default_factory=list)

    def read(self) -> int:
        self.events.append("read")
        return 42

    def close(self) -> None:
        self.close_calls += 1
        self.events.append("close")
        if self.close_error is not None:
            raise self.close_error

    def __repr__(self) -> str:
        return f"MockResource({self.name!r})"
