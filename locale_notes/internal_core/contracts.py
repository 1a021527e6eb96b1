from __future__ import annotations

import uuid
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

AuthorizationStatus = Literal[
    "undetermined",
    "authorizedWhenInUse",
    "authorizedAlways",
    "restricted",
    "denied",
]

AUTHORIZED_STATUSES: frozenset[str] = frozenset({"authorizedWhenInUse", "authorizedAlways"})
REFUSED_STATUSES: frozenset[str] = frozenset({"restricted", "denied"})

ControllerState = Literal["idle", "permission_requested", "denied", "tracking"]


class Coordinate(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"


class Note(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    content: str = Field(min_length=1)
    coordinate: Coordinate


class PinStyle(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    tint: str = "red"
    can_show_callout: bool = True
    detail_accessory: bool = True


class PinAnnotation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    note_id: str
    coordinate: Coordinate
    title: str
    style: PinStyle = Field(default_factory=PinStyle)


class VisibleRegion(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    center: Coordinate
    width_m: float = Field(gt=0.0)
    height_m: float = Field(gt=0.0)
    animated: bool = True


class NoteDetail(BaseModel):
    """One presentation of a note's content in the detail popover."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    content: str


class NoteDetailRequested(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    content: str


class AlertState(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = "Error"
    message: str
    dismiss_label: str = "OK"
    code: Optional[str] = None

    @field_validator("message")
    @classmethod
    def _message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("AlertState.message must not be blank")
        return value
