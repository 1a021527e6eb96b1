from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import LocaleConfig, load_config
from .contracts import PinStyle
from .controller import AppController
from .location import build_location_provider
from .location.base import LocationProvider
from .map import build_map_renderer
from .map.base import MapRenderer
from .surface import ViewState


@dataclass(frozen=True)
class LocaleSession:
    cfg: LocaleConfig
    provider: LocationProvider
    renderer: MapRenderer
    view: ViewState
    controller: AppController


def build_session(cfg: Optional[LocaleConfig] = None) -> LocaleSession:
    cfg = cfg or load_config()
    provider = build_location_provider(cfg)
    renderer = build_map_renderer(cfg)
    view = ViewState()
    controller = AppController(
        provider,
        renderer,
        view,
        region_span_m=cfg.LOCALE_REGION_SPAN_METERS,
        animate_region=cfg.LOCALE_ANIMATE_REGION,
        pin_style=PinStyle(tint=cfg.LOCALE_PIN_TINT),
    )
    return LocaleSession(
        cfg=cfg,
        provider=provider,
        renderer=renderer,
        view=view,
        controller=controller,
    )
