from __future__ import annotations

import logging
from typing import Callable, List

from ..contracts import AuthorizationStatus
from .base import LocationProvider

logger = logging.getLogger(__name__)

StatusObserver = Callable[[AuthorizationStatus], None]


class AuthorizationGate:
    """Latest known location-permission status plus a de-duplicated request path.

    A request reaches the provider only while the status is ``undetermined``
    and no earlier request is still waiting for an answer. Any determined
    status clears the pending request; nothing is ever retried.
    """

    def __init__(self, provider: LocationProvider) -> None:
        self._provider = provider
        self._status: AuthorizationStatus = "undetermined"
        self._pending = False
        self._observers: List[StatusObserver] = []

    def current_status(self) -> AuthorizationStatus:
        return self._status

    @property
    def request_pending(self) -> bool:
        return self._pending

    def subscribe(self, observer: StatusObserver) -> None:
        self._observers.append(observer)

    def request_permission(self) -> bool:
        if self._pending or self._status != "undetermined":
            logger.debug(
                "permission request skipped status=%s pending=%s", self._status, self._pending
            )
            return False
        self._pending = True
        logger.info("requesting when-in-use location permission provider=%s", self._provider.name())
        self._provider.request_authorization()
        return True

    def handle_status_change(self, status: AuthorizationStatus) -> None:
        previous = self._status
        self._status = status
        if status != "undetermined":
            self._pending = False
        logger.info("authorization changed from=%s to=%s", previous, status)
        for observer in list(self._observers):
            observer(status)
