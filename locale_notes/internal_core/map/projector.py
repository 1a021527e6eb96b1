from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from ..contracts import Note, NoteDetailRequested, PinAnnotation, PinStyle
from .base import MapRenderer

logger = logging.getLogger(__name__)

DetailListener = Callable[[NoteDetailRequested], None]


class MapPinProjector:
    """Keeps one map marker per note and turns marker taps into detail requests."""

    def __init__(self, renderer: MapRenderer, style: Optional[PinStyle] = None) -> None:
        self._renderer = renderer
        self._style = style or PinStyle()
        self._listeners: List[DetailListener] = []
        self._pins: Dict[str, PinAnnotation] = {}
        self._handles: Dict[str, str] = {}

    def add_listener(self, listener: DetailListener) -> None:
        self._listeners.append(listener)

    def place(self, note: Note) -> Optional[str]:
        if note.id in self._pins:
            logger.debug("pin already placed note_id=%s", note.id)
            return None
        pin = PinAnnotation(
            note_id=note.id,
            coordinate=note.coordinate,
            title=note.content,
            style=self._style,
        )
        handle = self._renderer.add_annotation(pin.coordinate, pin.title, pin.style)
        self._pins[note.id] = pin
        self._handles[handle] = note.id
        logger.info("pin added to map note_id=%s handle=%s", note.id, handle)
        return handle

    def pins(self) -> List[PinAnnotation]:
        return list(self._pins.values())

    def handles(self) -> Dict[str, str]:
        return dict(self._handles)

    def on_annotation_tapped(self, handle: str) -> bool:
        note_id = self._handles.get(handle)
        if note_id is None:
            # The user-location marker and foreign markers carry no note.
            logger.debug("tap ignored for unknown handle=%s", handle)
            return False
        event = NoteDetailRequested(content=self._pins[note_id].title)
        for listener in list(self._listeners):
            listener(event)
        return True
