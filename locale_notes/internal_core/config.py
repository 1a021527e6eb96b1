from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .contracts import AuthorizationStatus
from .errors import ConfigError

_AUTH_STATUSES: set[str] = {
    "undetermined",
    "authorizedWhenInUse",
    "authorizedAlways",
    "restricted",
    "denied",
}


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def _getenv_opt_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return float(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _getenv_auth_status(name: str) -> Optional[AuthorizationStatus]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    if value not in _AUTH_STATUSES:
        raise ConfigError(f"{name} must be one of {sorted(_AUTH_STATUSES)}, got {value!r}")
    return value  # type: ignore[return-value]


@dataclass(frozen=True)
class LocaleConfig:
    LOCALE_LOG_LEVEL: str
    LOCALE_REGION_SPAN_METERS: float
    LOCALE_ANIMATE_REGION: bool
    LOCALE_DESIRED_ACCURACY: str
    LOCALE_DISTANCE_FILTER_METERS: Optional[float]
    LOCALE_LOCATION_PROVIDER: str
    LOCALE_MAP_RENDERER: str
    LOCALE_SIMULATED_AUTH_RESPONSE: Optional[AuthorizationStatus]
    LOCALE_PIN_TINT: str
    LOCALE_SHOW_USER_LOCATION: bool
    LOCALE_API_WAIT_SECONDS: float


def load_config() -> LocaleConfig:
    span = _getenv_float("LOCALE_REGION_SPAN_METERS", 500.0)
    if span <= 0:
        raise ConfigError(f"LOCALE_REGION_SPAN_METERS must be positive, got {span}")

    return LocaleConfig(
        LOCALE_LOG_LEVEL=_getenv_str("LOCALE_LOG_LEVEL", "INFO"),
        LOCALE_REGION_SPAN_METERS=span,
        LOCALE_ANIMATE_REGION=_getenv_bool("LOCALE_ANIMATE_REGION", True),
        LOCALE_DESIRED_ACCURACY=_getenv_str("LOCALE_DESIRED_ACCURACY", "best"),
        # None means no distance filter: every fix is delivered.
        LOCALE_DISTANCE_FILTER_METERS=_getenv_opt_float("LOCALE_DISTANCE_FILTER_METERS"),
        LOCALE_LOCATION_PROVIDER=_getenv_str("LOCALE_LOCATION_PROVIDER", "simulated"),
        LOCALE_MAP_RENDERER=_getenv_str("LOCALE_MAP_RENDERER", "memory"),
        LOCALE_SIMULATED_AUTH_RESPONSE=_getenv_auth_status("LOCALE_SIMULATED_AUTH_RESPONSE"),
        LOCALE_PIN_TINT=_getenv_str("LOCALE_PIN_TINT", "red"),
        LOCALE_SHOW_USER_LOCATION=_getenv_bool("LOCALE_SHOW_USER_LOCATION", True),
        LOCALE_API_WAIT_SECONDS=_getenv_float("LOCALE_API_WAIT_SECONDS", 5.0),
    )
