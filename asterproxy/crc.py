"""CRC16 (XMODEM/CCITT) as used for cluster slot hashing."""

from __future__ import annotations

_POLY = 0x1021


def _build_table() -> tuple[int, ...]:
    table = []
    for i in range(256):
        crc = i << 8
        for _ in range(8):
            crc = ((crc << 1) ^ _POLY) if crc & 0x8000 else (crc << 1)
        table.append(crc & 0xFFFF)
    return tuple(table)


_TABLE = _build_table()


def crc16(data: bytes | bytearray) -> int:
    """Compute the CRC16 checksum of ``data``."""
    crc = 0
    for byte in data:
        crc = ((crc << 8) & 0xFFFF) ^ _TABLE[((crc >> 8) ^ byte) & 0xFF]
    return crc