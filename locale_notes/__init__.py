"""
Locale notes package.

Design intent:
- Keep the location-tracking and note-pinning state machine free of any UI toolkit.
- Talk to platform location/map services only through small provider interfaces.
"""
