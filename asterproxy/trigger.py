"""Rate-limited trigger for refreshing the cluster slot layout."""

from __future__ import annotations

import enum
import logging
import queue
import time
from typing import Callable

logger = logging.getLogger(__name__)

_GAPS = frozenset(2**i for i in range(4, 17))
_COUNTER_MASK = 0xFFFF
_U32_MASK = 0xFFFFFFFF


class TriggerBy(enum.Enum):
    """Why a layout fetch was requested."""

    INTERVAL = "interval"
    MOVED = "moved"
    ERROR = "error"


class SingleFlightTrigger:
    """Push fetch requests into ``sink``, at most once per interval.

    Between intervals a request still goes through when the number of
    attempts hits a power of two from 16 upward.
    """

    def __init__(
        self,
        interval: float,
        sink: "queue.Queue[TriggerBy]",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval = interval
        self._sink = sink
        self._clock = clock
        self._latest = clock()
        self._counter = 0

    @property
    def counter(self) -> int:
        return self._counter

    def try_trigger(self) -> bool:
        """Trigger if allowed now; return whether a trigger was attempted."""
        if self._incr_counter() or self._clock() - self._latest > self.interval:
            self._trigger()
            return True
        return False

    def ensure_trigger(self) -> None:
        """Trigger unconditionally."""
        self._trigger()

    def _trigger(self) -> bool:
        try:
            self._sink.put_nowait(TriggerBy.ERROR)
        except queue.Full:
            logger.warning("fail to trigger fetch process due fetch channel is full")
            return False
        self._latest = self._clock()
        self._counter = 0
        logger.info("succeed trigger fetch process")
        return True

    def _incr_counter(self) -> bool:
        self._counter = (self._counter + 1) & _U32_MASK
        return self.check_gap(self._counter & _COUNTER_MASK)

    @staticmethod
    def check_gap(value: int) -> bool:
        """True when ``value`` is one of the trigger gaps (2**4 .. 2**16)."""
        return value in _GAPS