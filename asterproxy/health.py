"""Ping-driven health tracking for a standalone backend node."""

from __future__ import annotations

import enum
import logging

logger = logging.getLogger(__name__)

DEFAULT_PING_INTERVAL_MS = 300_000
DEFAULT_PING_SUCC_INTERVAL_MS = 1_000
_U8_MASK = 0xFF


class PingAction(enum.Flag):
    """What the proxy should do after a ping result."""

    NONE = 0
    ADD_NODE = enum.auto()
    REMOVE_NODE = enum.auto()
    RECONNECT = enum.auto()


class PingHealth:
    """Counts consecutive ping failures of one node.

    When the failure count reaches ``limit`` the node is taken out of the
    ring; a success after more than ``limit`` failures puts it back. Every
    failure asks for a reconnect. While failing, pings are spaced by
    ``interval_ms``; while healthy, by ``succ_interval_ms``.
    """

    def __init__(
        self,
        limit: int,
        interval_ms: int = DEFAULT_PING_INTERVAL_MS,
        succ_interval_ms: int = DEFAULT_PING_SUCC_INTERVAL_MS,
    ) -> None:
        if not 1 <= limit <= _U8_MASK:
            raise ValueError(f"ping fail limit must be in 1..255, got {limit}")
        if interval_ms <= 0 or succ_interval_ms <= 0:
            raise ValueError("ping intervals must be positive")
        self.limit = limit
        self.interval_ms = interval_ms
        self.succ_interval_ms = succ_interval_ms
        self.count = 0
        self.failing = False

    @property
    def next_interval_ms(self) -> int:
        """Delay before the next ping, given the current state."""
        return self.interval_ms if self.failing else self.succ_interval_ms

    def record(self, success: bool) -> PingAction:
        """Account for one ping result and return the actions it calls for."""
        if success:
            action = PingAction.NONE
            if self.count > self.limit:
                action = PingAction.ADD_NODE
            self.count = 0
            self.failing = False
            return action

        self.count = (self.count + 1) & _U8_MASK
        logger.debug("ping state fail count=%d limit=%d", self.count, self.limit)
        action = PingAction.RECONNECT
        if self.count == self.limit:
            action |= PingAction.REMOVE_NODE
            self.failing = True
        elif self.count > self.limit:
            self.failing = True
        else:
            self.failing = False
        return action