from .config import LocaleConfig, load_config
from .controller import AppController
from .note_store import InMemoryNoteStore
from .session import LocaleSession, build_session
from .surface import ViewState

__all__ = [
    "AppController",
    "InMemoryNoteStore",
    "LocaleConfig",
    "LocaleSession",
    "ViewState",
    "build_session",
    "load_config",
]
