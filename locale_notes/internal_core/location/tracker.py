from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from ..contracts import Coordinate
from .base import LocationProvider

logger = logging.getLogger(__name__)

PositionObserver = Callable[[Coordinate], None]


class LocationTracker:
    def __init__(
        self,
        provider: LocationProvider,
        on_initial_fix: Callable[[Coordinate], None],
    ) -> None:
        self._provider = provider
        self._on_initial_fix = on_initial_fix
        self._observers: List[PositionObserver] = []
        self.current_position: Optional[Coordinate] = None
        # Per instance, not per start(): centering happens once per tracker.
        self.initial_centering_done = False
        self.running = False

    def subscribe(self, observer: PositionObserver) -> None:
        self._observers.append(observer)

    def start(self) -> bool:
        if self.running:
            return False
        self.running = True
        self._provider.start_updates()
        logger.info("started updating location provider=%s", self._provider.name())
        return True

    def stop(self) -> bool:
        if not self.running:
            return False
        self.running = False
        self._provider.stop_updates()
        logger.info("stopped updating location provider=%s", self._provider.name())
        return True

    def handle_fixes(self, fixes: Sequence[Coordinate]) -> None:
        if not self.running:
            # Batches queued before stop() arrive late; they are not applied.
            logger.debug("fixes dropped while stopped count=%s", len(fixes))
            return
        if not fixes:
            logger.debug("empty fix list ignored")
            return

        position = fixes[-1]
        self.current_position = position
        logger.debug("location updated position=%s", position)

        if not self.initial_centering_done:
            self._on_initial_fix(position)
            self.initial_centering_done = True
            logger.info("initial location set position=%s", position)

        for observer in list(self._observers):
            observer(position)
