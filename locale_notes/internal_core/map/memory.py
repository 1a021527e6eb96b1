from __future__ import annotations

from typing import Dict, List, Optional

from ..contracts import Coordinate, PinStyle, VisibleRegion
from .base import MapRenderer, TapCallback

USER_LOCATION_HANDLE = "user-location"


class RenderedAnnotation:
    __slots__ = ("handle", "coordinate", "title", "style")

    def __init__(self, handle: str, coordinate: Coordinate, title: str, style: PinStyle) -> None:
        self.handle = handle
        self.coordinate = coordinate
        self.title = title
        self.style = style


class InMemoryMapRenderer(MapRenderer):
    def __init__(self) -> None:
        self._counter = 0
        self._tap_callbacks: List[TapCallback] = []
        self.annotations: Dict[str, RenderedAnnotation] = {}
        self.regions: List[VisibleRegion] = []
        self.user_location_visible = False

    def set_visible_region(
        self, center: Coordinate, width_m: float, height_m: float, animated: bool = True
    ) -> None:
        self.regions.append(
            VisibleRegion(center=center, width_m=width_m, height_m=height_m, animated=animated)
        )

    def add_annotation(self, coordinate: Coordinate, title: str, style: PinStyle) -> str:
        self._counter += 1
        handle = f"pin-{self._counter}"
        self.annotations[handle] = RenderedAnnotation(handle, coordinate, title, style)
        return handle

    def subscribe_annotation_taps(self, callback: TapCallback) -> None:
        self._tap_callbacks.append(callback)

    def show_user_location(self, enabled: bool) -> None:
        self.user_location_visible = enabled

    def name(self) -> str:
        return "memory"

    @property
    def visible_region(self) -> Optional[VisibleRegion]:
        return self.regions[-1] if self.regions else None

    def tap(self, handle: str) -> None:
        """Simulate the callout detail button on a marker being pressed."""
        if handle != USER_LOCATION_HANDLE and handle not in self.annotations:
            raise KeyError(f"Unknown annotation handle: {handle}")
        for callback in list(self._tap_callbacks):
            callback(handle)
