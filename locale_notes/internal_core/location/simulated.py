from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..contracts import AuthorizationStatus, Coordinate
from .base import AuthorizationCallback, FixCallback, LocationProvider

logger = logging.getLogger(__name__)


class SimulatedLocationProvider(LocationProvider):
    """Location provider whose fixes and permission answers are pushed in by hand.

    ``auth_response`` is the status delivered when authorization is requested.
    Leave it as ``None`` to keep the request pending until
    :meth:`deliver_authorization` is called.
    """

    def __init__(self, auth_response: Optional[AuthorizationStatus] = None) -> None:
        self._auth_response = auth_response
        self._status: AuthorizationStatus = "undetermined"
        self._fix_callbacks: List[FixCallback] = []
        self._auth_callbacks: List[AuthorizationCallback] = []
        self.updating = False
        self.authorization_requests = 0
        self.start_requests = 0
        self.stop_requests = 0
        self.desired_accuracy = "best"
        self.distance_filter_m: Optional[float] = None

    def request_authorization(self) -> None:
        self.authorization_requests += 1
        if self._auth_response is not None:
            self.deliver_authorization(self._auth_response)

    def authorization_status(self) -> AuthorizationStatus:
        return self._status

    def start_updates(self) -> None:
        self.start_requests += 1
        self.updating = True

    def stop_updates(self) -> None:
        self.stop_requests += 1
        self.updating = False

    def subscribe_fixes(self, callback: FixCallback) -> None:
        self._fix_callbacks.append(callback)

    def subscribe_authorization(self, callback: AuthorizationCallback) -> None:
        self._auth_callbacks.append(callback)

    def configure(self, desired_accuracy: str, distance_filter_m: Optional[float]) -> None:
        self.desired_accuracy = desired_accuracy
        self.distance_filter_m = distance_filter_m

    def name(self) -> str:
        return "simulated"

    def deliver_authorization(self, status: AuthorizationStatus) -> None:
        self._status = status
        for callback in list(self._auth_callbacks):
            callback(status)

    def deliver_fixes(self, fixes: Sequence[Coordinate]) -> bool:
        """Push a batch of fixes to subscribers. Returns False while updates are stopped."""
        if not self.updating:
            logger.debug("simulated fixes dropped, updates stopped count=%s", len(fixes))
            return False
        for callback in list(self._fix_callbacks):
            callback(list(fixes))
        return True
