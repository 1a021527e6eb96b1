from __future__ import annotations

from ..config import LocaleConfig
from ..errors import ConfigError
from .base import MapRenderer
from .memory import USER_LOCATION_HANDLE, InMemoryMapRenderer
from .projector import MapPinProjector


def build_map_renderer(cfg: LocaleConfig) -> MapRenderer:
    name = cfg.LOCALE_MAP_RENDERER.strip().lower()
    if name == "memory":
        renderer: MapRenderer = InMemoryMapRenderer()
    else:
        raise ConfigError(f"Unknown LOCALE_MAP_RENDERER: {cfg.LOCALE_MAP_RENDERER!r}")
    renderer.show_user_location(cfg.LOCALE_SHOW_USER_LOCATION)
    return renderer


__all__ = [
    "InMemoryMapRenderer",
    "MapPinProjector",
    "MapRenderer",
    "USER_LOCATION_HANDLE",
    "build_map_renderer",
]
