"""The 32-bit-folded FNV-1a hash used for standalone key routing."""

from __future__ import annotations

_OFFSET_BASIS = 14_695_981_039_346_656_037
_PRIME = 1_099_511_628_211 & 0xFFFF
_MASK32 = 0xFFFFFFFF


class Fnv1a64:
    """Incremental hasher; state is folded to 32 bits on each update."""

    def __init__(self) -> None:
        self._state = _OFFSET_BASIS

    def update(self, data: bytes | bytearray) -> None:
        val = self._state & _MASK32
        for byte in data:
            val ^= byte
            val = (val * _PRIME) & _MASK32
        self._state = val

    def digest(self) -> int:
        return self._state


def fnv1a64(data: bytes | bytearray) -> int:
    """Hash ``data`` in one call."""
    hasher = Fnv1a64()
    hasher.update(data)
    return hasher.digest()