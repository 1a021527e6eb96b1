from __future__ import annotations

"""
Typed inbound messages consumed by the app controller.

Every collaborator callback and UI action becomes one of these before it is
queued, so handling order is the posting order.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from .contracts import AuthorizationStatus, Coordinate, NoteDetailRequested


@dataclass(frozen=True)
class Appeared:
    pass


@dataclass(frozen=True)
class AuthorizationChanged:
    status: AuthorizationStatus


@dataclass(frozen=True)
class FixesReceived:
    fixes: Tuple[Coordinate, ...]


@dataclass(frozen=True)
class NoteFormOpened:
    pass


@dataclass(frozen=True)
class NoteFormCancelled:
    pass


@dataclass(frozen=True)
class AddNoteRequested:
    content: str


@dataclass(frozen=True)
class AnnotationTapped:
    handle: str


@dataclass(frozen=True)
class AlertDismissed:
    pass


@dataclass(frozen=True)
class DetailDismissed:
    pass


@dataclass(frozen=True)
class DetailRequested:
    event: NoteDetailRequested


InboundMessage = Union[
    Appeared,
    AuthorizationChanged,
    FixesReceived,
    NoteFormOpened,
    NoteFormCancelled,
    AddNoteRequested,
    AnnotationTapped,
    DetailRequested,
    AlertDismissed,
    DetailDismissed,
]
