from __future__ import annotations


class LocaleError(RuntimeError):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class InvalidState(LocaleError):
    def __init__(self, message: str):
        super().__init__("INVALID_STATE", message)


class PermissionDenied(LocaleError):
    def __init__(self, message: str = "Location access was denied. Please enable location services for this app in Settings."):
        super().__init__("PERMISSION_DENIED", message)


class PositionUnavailable(LocaleError):
    def __init__(self, message: str = "Unable to determine your location. Please ensure location services are enabled."):
        super().__init__("POSITION_UNAVAILABLE", message)


class ConfigError(LocaleError):
    def __init__(self, message: str):
        super().__init__("CONFIG_ERROR", message)


class PinPlacementFailed(LocaleError):
    def __init__(self, message: str = "Unable to place the note on the map. Please try again."):
        super().__init__("PIN_PLACEMENT_FAILED", message)
