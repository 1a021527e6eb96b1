from __future__ import annotations

"""
View-facing state for a Locale session.

Design intent:
- Replace framework-bound observable properties with explicit state plus notify.
- Keep exactly one alert slot and one detail slot; newer values overwrite older ones.
"""

from abc import ABC, abstractmethod
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

from .contracts import AlertState, NoteDetail
from .errors import LocaleError

ViewObserver = Callable[["ViewState"], None]


class UISurface(ABC):
    @abstractmethod
    def show_error(self, error: LocaleError) -> None: ...

    @abstractmethod
    def dismiss_alert(self) -> bool: ...

    @abstractmethod
    def show_note_detail(self, content: str) -> None: ...

    @abstractmethod
    def dismiss_detail(self) -> bool: ...

    @abstractmethod
    def set_note_form_open(self, is_open: bool) -> None: ...


class ViewState(UISurface):
    def __init__(self) -> None:
        self._lock = RLock()
        self._observers: List[ViewObserver] = []
        self.alert: Optional[AlertState] = None
        self.detail: Optional[NoteDetail] = None
        self.note_form_open = False

    def subscribe(self, observer: ViewObserver) -> None:
        self._observers.append(observer)

    def show_error(self, error: LocaleError) -> None:
        with self._lock:
            self.alert = AlertState(message=error.message, code=error.code)
        self._notify()

    def dismiss_alert(self) -> bool:
        with self._lock:
            had_alert = self.alert is not None
            self.alert = None
        if had_alert:
            self._notify()
        return had_alert

    def show_note_detail(self, content: str) -> None:
        with self._lock:
            self.detail = NoteDetail(content=content)
        self._notify()

    def dismiss_detail(self) -> bool:
        with self._lock:
            had_detail = self.detail is not None
            self.detail = None
        if had_detail:
            self._notify()
        return had_detail

    def set_note_form_open(self, is_open: bool) -> None:
        with self._lock:
            changed = self.note_form_open != is_open
            self.note_form_open = is_open
        if changed:
            self._notify()

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "alert": self.alert,
                "detail": self.detail,
                "note_form_open": self.note_form_open,
            }

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self)
