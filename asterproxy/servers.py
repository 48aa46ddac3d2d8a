"""Parsing of standalone server lines and key routing over them."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .ketama import HashRing

_WEIGHT_RE = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class ServerLine:
    """One configured backend: ``addr[:weight] [alias]``."""

    addr: str
    weight: int = 1
    alias: Optional[str] = None


def _parse_weight(text: str, server: str) -> int:
    if not _WEIGHT_RE.fullmatch(text):
        raise ValueError(f"invalid weight {text!r} in server line {server!r}")
    return int(text)


def _parse_line(server: str) -> ServerLine:
    first, *rest = server.split(" ")
    alias = rest[0] if rest else None

    if first.count(":") == 1:
        return ServerLine(addr=first, weight=1, alias=alias)

    parts = [part for part in first.rsplit(":", 1)[::-1] if part]
    if not parts:
        raise ValueError(f"server line {server!r} has no address")
    weight = _parse_weight(parts[0], server)
    if len(parts) < 2:
        raise ValueError(f"server line {server!r} has no address")
    return ServerLine(addr=parts[1], weight=weight, alias=alias)


def parse_servers(servers: Iterable[str]) -> list[ServerLine]:
    """Parse lines such as ``192.168.1.2:1074:10 redis-20``.

    An address given without a weight gets weight 1. A malformed weight
    or a missing address raises ValueError.
    """
    return [_parse_line(server) for server in servers]


def unwrap_spots(
    lines: Sequence[ServerLine],
) -> tuple[list[str], list[str], list[int]]:
    """Split server lines into addresses, aliases (where given) and weights."""
    nodes = [line.addr for line in lines]
    aliases = [line.alias for line in lines if line.alias is not None]
    weights = [line.weight for line in lines]
    return nodes, aliases, weights


@dataclass
class ServerLayout:
    """The hash ring plus the alias and weight tables built from servers.

    When aliases are configured the ring holds aliases and ``alias`` maps
    each to its address; otherwise the ring holds addresses directly.
    """

    ring: HashRing = field(default_factory=HashRing)
    alias: dict[str, str] = field(default_factory=dict)
    spots: dict[str, int] = field(default_factory=dict)

    @property
    def has_alias(self) -> bool:
        return bool(self.alias)

    @property
    def addrs(self) -> set[str]:
        """Every backend address this layout can route to."""
        if self.alias:
            return set(self.alias.values())
        return set(self.spots)

    def node_for(self, name: str) -> str:
        """Resolve a ring name to a backend address."""
        if not self.alias:
            return name
        try:
            return self.alias[name]
        except KeyError:
            raise KeyError(f"unknown alias {name!r}") from None

    def route(self, key_hash: int) -> Optional[str]:
        """Address owning ``key_hash``, or None when the ring is empty."""
        name = self.ring.get_node(key_hash)
        if name is None:
            return None
        return self.node_for(name)


def build_layout(servers: Iterable[str]) -> ServerLayout:
    """Parse ``servers`` and build the routing layout for them."""
    nodes, aliases, weights = unwrap_spots(parse_servers(servers))
    alias_map = dict(zip(aliases, nodes))
    names = aliases if aliases else nodes
    spots = dict(zip(names, weights))
    ring = HashRing(names, weights)
    return ServerLayout(ring=ring, alias=alias_map, spots=spots)