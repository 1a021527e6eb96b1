from __future__ import annotations

import uuid
from threading import RLock
from typing import Dict, Iterable, Iterator, List, Optional

from .contracts import Coordinate, Note
from .errors import InvalidState


class _NoteView:
    """Restartable iterable over the store's notes as of iteration start."""

    def __init__(self, store: "InMemoryNoteStore") -> None:
        self._store = store

    def __iter__(self) -> Iterator[Note]:
        return iter(self._store._snapshot())

    def __len__(self) -> int:
        return len(self._store)


class InMemoryNoteStore:
    def __init__(self) -> None:
        self._lock = RLock()
        self._notes: List[Note] = []
        self._by_id: Dict[str, Note] = {}

    def append(self, content: str, position: Optional[Coordinate]) -> Note:
        return self.commit(self.build(content, position))

    def build(self, content: str, position: Optional[Coordinate]) -> Note:
        """Create a note with a fresh id without storing it."""
        if position is None:
            raise InvalidState("Cannot append a note without a known position")
        return Note(id=uuid.uuid4().hex, content=content, coordinate=position)

    def commit(self, note: Note) -> Note:
        with self._lock:
            if note.id in self._by_id:
                raise InvalidState(f"Note already stored: {note.id}")
            self._notes.append(note)
            self._by_id[note.id] = note
        return note

    def all(self) -> Iterable[Note]:
        return _NoteView(self)

    def get(self, note_id: str) -> Note:
        with self._lock:
            note = self._by_id.get(note_id)
            if note is None:
                raise KeyError(f"Unknown note_id: {note_id}")
            return note

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)

    def _snapshot(self) -> List[Note]:
        with self._lock:
            return list(self._notes)
