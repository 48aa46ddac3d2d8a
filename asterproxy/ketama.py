"""Ketama consistent hash ring."""

from __future__ import annotations

import bisect
import hashlib
import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

_POINTER_PER_SERVER = 160.0
_POINTS_PER_HASH = 4


class RingConfigError(ValueError):
    """Raised when nodes and weights do not line up."""


def _node_hash(key: str, align: int) -> int:
    digest = hashlib.md5(key.encode()).digest()
    return int.from_bytes(digest[align * 4 : align * 4 + 4], "little")


class HashRing:
    """Weighted consistent hash ring mapping hashes to node names."""

    def __init__(self, nodes: Iterable[str] = (), spots: Iterable[int] = ()) -> None:
        nodes = list(nodes)
        spots = list(spots)
        if len(nodes) != len(spots):
            raise RingConfigError(
                "servers: all server must have(or not) weight together"
            )
        self._nodes = nodes
        self._spots = spots
        self._hashes: list[int] = []
        self._owners: list[str] = []
        self._build()

    @property
    def nodes(self) -> list[str]:
        return list(self._nodes)

    def __len__(self) -> int:
        return len(self._hashes)

    def _build(self) -> None:
        ticks: list[tuple[int, str]] = []
        server_count = float(len(self._nodes))
        total = float(sum(self._spots))
        for node, spot in zip(self._nodes, self._spots):
            if total == 0:
                points = 0
            else:
                percent = spot / total
                points = int(
                    (percent * _POINTER_PER_SERVER / 4.0 * server_count + 0.000_000_000_1)
                    * 4.0
                )
            for idx in range(points // _POINTS_PER_HASH):
                host = f"{node}-{idx}"
                ticks.extend(
                    (_node_hash(host, x), node) for x in range(_POINTS_PER_HASH)
                )
        ticks.sort(key=lambda t: t[0])
        self._hashes = [h for h, _ in ticks]
        self._owners = [n for _, n in ticks]
        logger.debug("ring init with %d ticks", len(ticks))

    def add_node(self, node: str, spot: int) -> None:
        """Add ``node`` with weight ``spot``, or update its weight."""
        if node in self._nodes:
            self._spots[self._nodes.index(node)] = spot
        else:
            self._nodes.append(node)
            self._spots.append(spot)
        self._build()

    def del_node(self, node: str) -> None:
        """Remove ``node`` from the ring if present."""
        if node in self._nodes:
            pos = self._nodes.index(node)
            del self._nodes[pos]
            del self._spots[pos]
            self._build()

    def get_node(self, hash_value: int) -> Optional[str]:
        """Return the node owning ``hash_value``, or None on an empty ring."""
        if not self._hashes:
            return None
        pos = bisect.bisect_left(self._hashes, hash_value)
        if pos == len(self._hashes):
            pos = 0
        return self._owners[pos]