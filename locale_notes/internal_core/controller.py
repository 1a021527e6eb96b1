from __future__ import annotations

"""
Session orchestration: permission flow, tracking, note pinning and detail display.

Design intent:
- Own the idle -> permission_requested -> {denied | tracking} state machine.
- Accept every external event as a typed message on one serial queue.
- Report user-visible failures through the surface's single alert slot.
"""

import logging
from typing import Callable, List, Optional

from .contracts import (
    AUTHORIZED_STATUSES,
    REFUSED_STATUSES,
    AuthorizationStatus,
    ControllerState,
    Coordinate,
    Note,
    NoteDetailRequested,
    PinStyle,
)
from .dispatch import SerialQueue
from .errors import LocaleError, PermissionDenied, PinPlacementFailed, PositionUnavailable
from .location.authorization import AuthorizationGate
from .location.base import LocationProvider
from .location.tracker import LocationTracker
from .map.base import MapRenderer
from .map.projector import MapPinProjector
from .messages import (
    AddNoteRequested,
    AlertDismissed,
    AnnotationTapped,
    Appeared,
    AuthorizationChanged,
    DetailDismissed,
    DetailRequested,
    FixesReceived,
    InboundMessage,
    NoteFormCancelled,
    NoteFormOpened,
)
from .note_store import InMemoryNoteStore
from .surface import UISurface

logger = logging.getLogger(__name__)

StateObserver = Callable[[ControllerState], None]

DEFAULT_REGION_SPAN_METERS = 500.0


class AppController:
    def __init__(
        self,
        provider: LocationProvider,
        renderer: MapRenderer,
        surface: UISurface,
        *,
        queue: Optional[SerialQueue] = None,
        store: Optional[InMemoryNoteStore] = None,
        region_span_m: float = DEFAULT_REGION_SPAN_METERS,
        animate_region: bool = True,
        pin_style: Optional[PinStyle] = None,
    ) -> None:
        self._renderer = renderer
        self._surface = surface
        self._queue = queue or SerialQueue()
        self._region_span_m = float(region_span_m)
        self._animate_region = animate_region
        self._observers: List[StateObserver] = []
        self._state: ControllerState = "idle"
        self._permission_requested = False

        self.store = store or InMemoryNoteStore()
        self.gate = AuthorizationGate(provider)
        self.tracker = LocationTracker(provider, on_initial_fix=self.center_map)
        self.projector = MapPinProjector(renderer, style=pin_style)

        self.gate.subscribe(self._on_authorization_status)
        self.projector.add_listener(self._on_detail_event)
        provider.subscribe_authorization(lambda status: self.post(AuthorizationChanged(status)))
        provider.subscribe_fixes(lambda fixes: self.post(FixesReceived(tuple(fixes))))
        renderer.subscribe_annotation_taps(lambda handle: self.post(AnnotationTapped(handle)))

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def current_position(self) -> Optional[Coordinate]:
        return self.tracker.current_position

    @property
    def authorization_status(self) -> AuthorizationStatus:
        return self.gate.current_status()

    def notes(self) -> List[Note]:
        return list(self.store.all())

    def subscribe(self, observer: StateObserver) -> None:
        self._observers.append(observer)

    # UI entry points; all of them go through the queue.

    def appear(self) -> None:
        self.post(Appeared())

    def open_note_form(self) -> None:
        self.post(NoteFormOpened())

    def cancel_note_form(self) -> None:
        self.post(NoteFormCancelled())

    def add_note(self, content: str) -> None:
        self.post(AddNoteRequested(content))

    def dismiss_alert(self) -> None:
        self.post(AlertDismissed())

    def dismiss_detail(self) -> None:
        self.post(DetailDismissed())

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        return self._queue.wait_idle(timeout)

    def pending_messages(self) -> int:
        return self._queue.pending()

    def post(self, message: InboundMessage) -> None:
        self._queue.submit(lambda: self._handle(message))

    def _handle(self, message: InboundMessage) -> None:
        if isinstance(message, Appeared):
            self._handle_appeared()
        elif isinstance(message, AuthorizationChanged):
            self.gate.handle_status_change(message.status)
        elif isinstance(message, FixesReceived):
            self.tracker.handle_fixes(message.fixes)
        elif isinstance(message, NoteFormOpened):
            self._handle_note_form_opened()
        elif isinstance(message, NoteFormCancelled):
            self._surface.set_note_form_open(False)
        elif isinstance(message, AddNoteRequested):
            self._handle_add_note(message.content)
        elif isinstance(message, AnnotationTapped):
            self.projector.on_annotation_tapped(message.handle)
        elif isinstance(message, DetailRequested):
            self._surface.show_note_detail(message.event.content)
        elif isinstance(message, AlertDismissed):
            self._surface.dismiss_alert()
        elif isinstance(message, DetailDismissed):
            self._surface.dismiss_detail()
        else:
            raise TypeError(f"Unsupported message: {message!r}")

    def _handle_appeared(self) -> None:
        if not self._permission_requested:
            self._permission_requested = True
            self.gate.request_permission()
        status = self.gate.current_status()
        if status == "undetermined":
            self._set_state("permission_requested")
        else:
            self._on_authorization_status(status)

    def _on_authorization_status(self, status: AuthorizationStatus) -> None:
        if status in AUTHORIZED_STATUSES:
            self.tracker.start()
            self._set_state("tracking")
        elif status in REFUSED_STATUSES:
            self.tracker.stop()
            self._set_state("denied")
            self._report(PermissionDenied())
        else:
            self.gate.request_permission()
            self._set_state("permission_requested")

    def _handle_note_form_opened(self) -> None:
        self._surface.set_note_form_open(True)
        position = self.tracker.current_position
        if position is None:
            self._report(PositionUnavailable())
            return
        self.center_map(position)

    def _handle_add_note(self, content: str) -> Optional[Note]:
        if not content:
            # Save is inert on an empty field; the form stays open.
            return None
        self._surface.set_note_form_open(False)

        position = self.tracker.current_position
        if position is None:
            self._report(PositionUnavailable())
            return None

        self.center_map(position)
        note = self.store.build(content, position)
        try:
            self.projector.place(note)
        except Exception:
            # The note is only stored once its pin exists.
            logger.exception("pin placement failed note_id=%s", note.id)
            self._report(PinPlacementFailed())
            return None
        self.store.commit(note)
        logger.info("note added note_id=%s position=%s", note.id, position)
        return note

    def _on_detail_event(self, event: NoteDetailRequested) -> None:
        self.post(DetailRequested(event))

    def center_map(self, position: Coordinate) -> None:
        self._renderer.set_visible_region(
            position, self._region_span_m, self._region_span_m, animated=self._animate_region
        )
        logger.debug("region set center=%s span_m=%s", position, self._region_span_m)

    def _report(self, error: LocaleError) -> None:
        logger.warning("surfacing error code=%s", error.code)
        self._surface.show_error(error)

    def _set_state(self, state: ControllerState) -> None:
        if state == self._state:
            return
        previous = self._state
        self._state = state
        logger.info("controller state from=%s to=%s", previous, state)
        for observer in list(self._observers):
            observer(state)
