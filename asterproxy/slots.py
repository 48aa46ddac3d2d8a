"""Cluster slot table: which master and replicas serve each hash slot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .crc import crc16
from .utils import trim_hash_tag

SLOTS_COUNT = 16384


def slot_for_key(
    key: bytes | bytearray, hash_tag: bytes = b"", slots_count: int = SLOTS_COUNT
) -> int:
    """Return the hash slot for ``key``, honouring a two-byte hash tag."""
    if slots_count <= 0:
        raise ValueError("slots_count must be positive")
    return crc16(trim_hash_tag(bytes(key), hash_tag)) % slots_count


@dataclass
class _Replica:
    addrs: list[str] = field(default_factory=list)
    current: int = 0

    def next_addr(self) -> str:
        if not self.addrs:
            return ""
        addr = self.addrs[self.current]
        self.current = (self.current + 1) % len(self.addrs)
        return addr


class SlotTable:
    """Per-slot master and replica addresses.

    Addresses once seen are remembered in the master and replica sets even
    after a slot moves away from them.
    """

    def __init__(
        self, slots_count: int = SLOTS_COUNT, read_from_slave: bool = False
    ) -> None:
        if slots_count <= 0:
            raise ValueError("slots_count must be positive")
        self.slots_count = slots_count
        self.read_from_slave = read_from_slave
        self._masters: list[str] = [""] * slots_count
        self._replicas: list[_Replica] = [_Replica() for _ in range(slots_count)]
        self._all_masters: set[str] = set()
        self._all_replicas: set[str] = set()

    def try_update_all(
        self, masters: Sequence[str], replicas: Sequence[Sequence[str]]
    ) -> bool:
        """Replace the layout; return True if anything changed."""
        changed = False
        for i, master in enumerate(masters[: self.slots_count]):
            if self._masters[i] != master:
                changed = True
                self._masters[i] = master
                self._all_masters.add(master)

        for i, replica in enumerate(replicas[: self.slots_count]):
            new_addrs = list(replica)
            if self._replicas[i].addrs != new_addrs:
                self._replicas[i] = _Replica(new_addrs)
                self._all_replicas.update(new_addrs)
                changed = True
        return changed

    def update_slot(self, slot: int, addr: str) -> bool:
        """Point ``slot`` at master ``addr``; return True if it moved."""
        old = self._masters[slot]
        self._masters[slot] = addr
        self._all_masters.add(addr)
        return old != addr

    def get_master(self, slot: int) -> Optional[str]:
        if 0 <= slot < self.slots_count:
            return self._masters[slot]
        return None

    def get_replica(self, slot: int) -> Optional[str]:
        """Return the next replica of ``slot`` in turn, "" if it has none."""
        if 0 <= slot < self.slots_count:
            return self._replicas[slot].next_addr()
        return None

    def all_masters(self) -> set[str]:
        return set(self._all_masters)

    def all_replicas(self) -> set[str]:
        return set(self._all_replicas)

    def is_master(self, addr: str) -> bool:
        return addr in self._all_masters

    def get_addr(self, slot: int, is_read: bool) -> str:
        """Address to send a command for ``slot`` to."""
        if self.read_from_slave and is_read:
            replica = self.get_replica(slot)
            if replica:
                return replica
        master = self.get_master(slot)
        if master is None:
            raise LookupError(f"slot {slot} out of range")
        return master

    def all_addrs(self, is_read: bool) -> set[str]:
        """Every replica for reads when reading from slaves, else every master."""
        if self.read_from_slave and is_read:
            return self.all_replicas()
        return self.all_masters()