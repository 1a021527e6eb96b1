from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from ..contracts import AuthorizationStatus, Coordinate

FixCallback = Callable[[Sequence[Coordinate]], None]
AuthorizationCallback = Callable[[AuthorizationStatus], None]


class LocationProvider(ABC):
    @abstractmethod
    def request_authorization(self) -> None: ...

    @abstractmethod
    def authorization_status(self) -> AuthorizationStatus: ...

    @abstractmethod
    def start_updates(self) -> None: ...

    @abstractmethod
    def stop_updates(self) -> None: ...

    @abstractmethod
    def subscribe_fixes(self, callback: FixCallback) -> None: ...

    @abstractmethod
    def subscribe_authorization(self, callback: AuthorizationCallback) -> None: ...

    @abstractmethod
    def configure(self, desired_accuracy: str, distance_filter_m: Optional[float]) -> None: ...

    @abstractmethod
    def name(self) -> str: ...
