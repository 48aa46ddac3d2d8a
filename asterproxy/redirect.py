"""MOVED and ASK redirections reported by cluster nodes."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from .slots import SlotTable

logger = logging.getLogger(__name__)


class RedirectKind(enum.Enum):
    """The two redirections a cluster node can answer with."""

    MOVE = "MOVED"
    ASK = "ASK"


@dataclass(frozen=True)
class Redirect:
    """Where a slot's command should go instead."""

    kind: RedirectKind
    slot: int
    to: str

    def is_ask(self) -> bool:
        """True for a one-off ASK redirection, False for a MOVED one."""
        return self.kind is RedirectKind.ASK


@dataclass
class Redirection:
    """A redirect target together with the command to resend."""

    target: Redirect
    cmd: Any = None


def apply_redirect(table: SlotTable, redirection: Redirection) -> bool:
    """Record a redirection in ``table``.

    A MOVED redirection points the slot at its new master for good; an ASK
    leaves the table alone. Returns True when the slot really changed owner,
    which is when a fresh layout fetch is worth triggering. The command is
    then to be resent to ``redirection.target.to``.
    """
    target = redirection.target
    if not 0 <= target.slot < table.slots_count:
        raise ValueError(
            f"slot {target.slot} out of range 0..{table.slots_count - 1}"
        )
    if target.is_ask():
        return False
    logger.info("slot %d was moved to %s", target.slot, target.to)
    return table.update_slot(target.slot, target.to)