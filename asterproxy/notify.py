"""A shared wake-up handle with a reference-style counter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

_U16_MAX = 0xFFFF


@dataclass
class _Shared:
    task: Optional[Callable[[], None]] = None
    count: int = 1


class Notify:
    """Handle shared among clones: one task to wake, one counter.

    Every clone bumps the shared counter. ``expect`` is kept per handle.
    """

    def __init__(self) -> None:
        self._shared = _Shared()
        self.expect = _U16_MAX

    def set_task(self, task: Callable[[], None]) -> None:
        """Set the callable woken by :meth:`notify` for every clone."""
        self._shared.task = task

    def notify(self) -> None:
        """Wake the registered task, if any."""
        if self._shared.task is not None:
            self._shared.task()

    @property
    def count(self) -> int:
        return self._shared.count

    def _store(self, value: int) -> None:
        if not 0 <= value <= _U16_MAX:
            raise OverflowError(f"notify counter out of range: {value}")
        self._shared.count = value

    def fetch_sub(self, val: int) -> int:
        """Subtract ``val`` from the counter and return the previous value."""
        origin = self._shared.count
        self._store(origin - val)
        return origin

    def fetch_add(self, val: int) -> int:
        """Add ``val`` to the counter and return the previous value."""
        origin = self._shared.count
        self._store(origin + val)
        return origin

    def clone(self) -> "Notify":
        """Return a handle sharing task and counter; the counter grows by one."""
        self._store(self._shared.count + 1)
        other = Notify.__new__(Notify)
        other._shared = self._shared
        other.expect = self.expect
        return other