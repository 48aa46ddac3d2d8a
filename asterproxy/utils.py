"""Small byte helpers shared across the proxy."""

from __future__ import annotations

from dataclasses import dataclass

_LOWER_BEGIN = ord("a")
_LOWER_END = ord("z")
_UPPER_TO_LOWER = ord("a") - ord("A")


def upper(data: bytes | bytearray) -> bytes:
    """Return ``data`` with ASCII lower-case letters turned to upper case."""
    return bytes(
        b - _UPPER_TO_LOWER if _LOWER_BEGIN <= b <= _LOWER_END else b for b in data
    )


def itoa(value: int) -> bytes:
    """Render a non-negative integer as ASCII decimal digits."""
    if value < 0:
        raise ValueError("itoa expects a non-negative integer")
    return str(value).encode("ascii")


def trim_hash_tag(key: bytes, hash_tag: bytes) -> bytes:
    """Return the part of ``key`` inside the hash tag, or ``key`` itself.

    The tag must be exactly two bytes (opening and closing). An empty tag
    body such as ``abc{}de`` leaves the key untouched.
    """
    if len(hash_tag) != 2:
        return key
    begin = key.find(hash_tag[:1])
    if begin < 0:
        return key
    end = key.find(hash_tag[1:2], begin)
    if end < 0:
        return key
    if end - begin > 1:
        return key[begin + 1 : end]
    return key


def find_lf(data: bytes | bytearray) -> int | None:
    """Return the index of the first line feed in ``data``, or None."""
    pos = data.find(b"\n")
    return None if pos < 0 else pos


@dataclass
class Range:
    """A half-open span ``[begin, end)`` within a buffer."""

    begin: int = 0
    end: int = 0

    def span(self) -> int:
        """Length of the range."""
        if self.end < self.begin:
            raise ValueError(f"range end {self.end} is before begin {self.begin}")
        return self.end - self.begin