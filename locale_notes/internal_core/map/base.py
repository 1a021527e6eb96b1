from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from ..contracts import Coordinate, PinStyle

TapCallback = Callable[[str], None]


class MapRenderer(ABC):
    @abstractmethod
    def set_visible_region(
        self, center: Coordinate, width_m: float, height_m: float, animated: bool = True
    ) -> None: ...

    @abstractmethod
    def add_annotation(self, coordinate: Coordinate, title: str, style: PinStyle) -> str:
        """Place a marker and return the renderer's handle for it."""

    @abstractmethod
    def subscribe_annotation_taps(self, callback: TapCallback) -> None: ...

    @abstractmethod
    def show_user_location(self, enabled: bool) -> None: ...

    @abstractmethod
    def name(self) -> str: ...
