"""Versioned store of reloaded configurations."""

from __future__ import annotations

import logging
import operator
import threading
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C")


class ConfigVersions(Generic[C]):
    """Keeps every published configuration under an increasing version.

    Version 0 holds the initial configuration. Publishing a configuration
    equal to the current one (by ``equals``) is a no-op. Safe to use from a
    watcher thread and readers at the same time.
    """

    def __init__(
        self,
        initial: C,
        reload: bool = False,
        equals: Callable[[C, C], bool] = operator.eq,
    ) -> None:
        self.reload = reload
        self._equals = equals
        self._lock = threading.Lock()
        self._versions: dict[int, C] = {0: initial}
        self._current = 0

    @property
    def current(self) -> int:
        """The newest published version number."""
        with self._lock:
            return self._current

    def get(self, version: int) -> Optional[C]:
        """Configuration stored under ``version``, or None."""
        with self._lock:
            return self._versions.get(version)

    def current_config(self) -> C:
        """The newest configuration."""
        with self._lock:
            return self._versions[self._current]

    def publish(self, config: C) -> int:
        """Store ``config`` as a new version unless it changes nothing.

        Returns the version that is current afterwards.
        """
        with self._lock:
            if self._equals(self._versions[self._current], config):
                logger.info("skip due to no change in configuration")
                return self._current
            self._current += 1
            self._versions[self._current] = config
            logger.info("load new config content as %r", config)
            return self._current