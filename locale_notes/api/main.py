from __future__ import annotations

"""
HTTP driver for a single Locale session.

Design intent:
- Keep handlers thin: every action becomes one controller call.
- Expose the simulated platform (permission answers, fixes, marker taps) for demos and tests.
- Read back view state (alert, detail, form) the way a screen would render it.
"""

import logging
import threading
from typing import Any, Callable, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from locale_notes.internal_core.config import load_config
from locale_notes.internal_core.contracts import (
    AlertState,
    AuthorizationStatus,
    ControllerState,
    Coordinate,
    Note,
    NoteDetail,
    VisibleRegion,
)
from locale_notes.internal_core.location import SimulatedLocationProvider
from locale_notes.internal_core.logging_config import configure_logging
from locale_notes.internal_core.map import InMemoryMapRenderer
from locale_notes.internal_core.session import LocaleSession, build_session


class AuthorizationDeliveryRequest(BaseModel):
    status: AuthorizationStatus


class FixDeliveryRequest(BaseModel):
    fixes: list[Coordinate] = Field(default_factory=list)


class FixDeliveryResponse(BaseModel):
    delivered: bool
    position: Optional[Coordinate] = None


class AddNoteRequest(BaseModel):
    content: str = ""


class SessionStateResponse(BaseModel):
    state: ControllerState
    authorization_status: AuthorizationStatus
    position: Optional[Coordinate] = None
    initial_centering_done: bool
    tracking: bool
    visible_region: Optional[VisibleRegion] = None
    alert: Optional[AlertState] = None
    detail: Optional[NoteDetail] = None
    note_form_open: bool
    note_count: int


class AnnotationResponse(BaseModel):
    handle: str
    note_id: str
    title: str
    coordinate: Coordinate
    tint: str


app = FastAPI(title="locale notes session service")
logger = logging.getLogger(__name__)
_SESSION_CREATE_LOCK = threading.Lock()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_session() -> LocaleSession:
    existing = getattr(app.state, "locale_session", None)
    if isinstance(existing, LocaleSession):
        return existing
    with _SESSION_CREATE_LOCK:
        existing = getattr(app.state, "locale_session", None)
        if isinstance(existing, LocaleSession):
            return existing
        cfg = load_config()
        configure_logging(cfg)
        created = build_session(cfg)
        setattr(app.state, "locale_session", created)
    logger.info(
        "session created provider=%s renderer=%s",
        created.provider.name(),
        created.renderer.name(),
    )
    return created


def _settle(session: LocaleSession, action: Callable[[], Any]) -> Any:
    """Run one action, then wait until the session queue has handled everything it posted."""
    result = action()
    if not session.controller.wait_idle(timeout=session.cfg.LOCALE_API_WAIT_SECONDS):
        raise HTTPException(status_code=503, detail="Session is busy, try again")
    return result


def _simulated_provider(session: LocaleSession) -> SimulatedLocationProvider:
    if not isinstance(session.provider, SimulatedLocationProvider):
        raise HTTPException(
            status_code=409,
            detail=f"Provider {session.provider.name()!r} does not accept injected events",
        )
    return session.provider


def _memory_renderer(session: LocaleSession) -> InMemoryMapRenderer:
    if not isinstance(session.renderer, InMemoryMapRenderer):
        raise HTTPException(
            status_code=409,
            detail=f"Renderer {session.renderer.name()!r} does not expose its annotations",
        )
    return session.renderer


def _session_state(session: LocaleSession) -> SessionStateResponse:
    controller = session.controller
    view = session.view.snapshot()
    region: Optional[VisibleRegion] = None
    if isinstance(session.renderer, InMemoryMapRenderer):
        region = session.renderer.visible_region
    return SessionStateResponse(
        state=controller.state,
        authorization_status=controller.authorization_status,
        position=controller.current_position,
        initial_centering_done=controller.tracker.initial_centering_done,
        tracking=controller.tracker.running,
        visible_region=region,
        alert=view["alert"],
        detail=view["detail"],
        note_form_open=view["note_form_open"],
        note_count=len(controller.store),
    )


@app.get("/session", response_model=SessionStateResponse)
def get_session_state() -> SessionStateResponse:
    return _session_state(_get_session())


@app.post("/session/appear", response_model=SessionStateResponse)
def appear() -> SessionStateResponse:
    session = _get_session()
    _settle(session, session.controller.appear)
    return _session_state(session)


@app.post("/platform/authorization", response_model=SessionStateResponse)
def deliver_authorization(payload: AuthorizationDeliveryRequest) -> SessionStateResponse:
    session = _get_session()
    provider = _simulated_provider(session)
    _settle(session, lambda: provider.deliver_authorization(payload.status))
    return _session_state(session)


@app.post("/platform/fixes", response_model=FixDeliveryResponse)
def deliver_fixes(payload: FixDeliveryRequest) -> FixDeliveryResponse:
    session = _get_session()
    provider = _simulated_provider(session)
    delivered = _settle(session, lambda: provider.deliver_fixes(payload.fixes))
    return FixDeliveryResponse(delivered=delivered, position=session.controller.current_position)


@app.post("/notes/form/open", response_model=SessionStateResponse)
def open_note_form() -> SessionStateResponse:
    session = _get_session()
    _settle(session, session.controller.open_note_form)
    return _session_state(session)


@app.post("/notes/form/cancel", response_model=SessionStateResponse)
def cancel_note_form() -> SessionStateResponse:
    session = _get_session()
    _settle(session, session.controller.cancel_note_form)
    return _session_state(session)


@app.post("/notes", response_model=SessionStateResponse)
def add_note(payload: AddNoteRequest) -> SessionStateResponse:
    session = _get_session()
    _settle(session, lambda: session.controller.add_note(payload.content))
    return _session_state(session)


@app.get("/notes", response_model=list[Note])
def list_notes() -> list[Note]:
    return _get_session().controller.notes()


@app.get("/annotations", response_model=list[AnnotationResponse])
def list_annotations() -> list[AnnotationResponse]:
    session = _get_session()
    renderer = _memory_renderer(session)
    handles = session.controller.projector.handles()
    out: list[AnnotationResponse] = []
    for handle, note_id in handles.items():
        rendered = renderer.annotations[handle]
        out.append(
            AnnotationResponse(
                handle=handle,
                note_id=note_id,
                title=rendered.title,
                coordinate=rendered.coordinate,
                tint=rendered.style.tint,
            )
        )
    return out


@app.post("/annotations/{handle}/tap", response_model=SessionStateResponse)
def tap_annotation(handle: str) -> SessionStateResponse:
    session = _get_session()
    renderer = _memory_renderer(session)
    try:
        _settle(session, lambda: renderer.tap(handle))
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _session_state(session)


@app.post("/alerts/dismiss", response_model=SessionStateResponse)
def dismiss_alert() -> SessionStateResponse:
    session = _get_session()
    _settle(session, session.controller.dismiss_alert)
    return _session_state(session)


@app.post("/detail/dismiss", response_model=SessionStateResponse)
def dismiss_detail() -> SessionStateResponse:
    session = _get_session()
    _settle(session, session.controller.dismiss_detail)
    return _session_state(session)


@app.get("/health")
def health() -> dict[str, Any]:
    session = _get_session()
    return {
        "status": "ok",
        "provider": session.provider.name(),
        "renderer": session.renderer.name(),
    }
