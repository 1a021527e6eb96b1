from __future__ import annotations

from ..config import LocaleConfig
from ..errors import ConfigError
from .authorization import AuthorizationGate
from .base import LocationProvider
from .simulated import SimulatedLocationProvider
from .tracker import LocationTracker


def build_location_provider(cfg: LocaleConfig) -> LocationProvider:
    name = cfg.LOCALE_LOCATION_PROVIDER.strip().lower()
    if name == "simulated":
        provider: LocationProvider = SimulatedLocationProvider(
            auth_response=cfg.LOCALE_SIMULATED_AUTH_RESPONSE
        )
    else:
        raise ConfigError(f"Unknown LOCALE_LOCATION_PROVIDER: {cfg.LOCALE_LOCATION_PROVIDER!r}")
    provider.configure(cfg.LOCALE_DESIRED_ACCURACY, cfg.LOCALE_DISTANCE_FILTER_METERS)
    return provider


__all__ = [
    "AuthorizationGate",
    "LocationProvider",
    "LocationTracker",
    "SimulatedLocationProvider",
    "build_location_provider",
]
