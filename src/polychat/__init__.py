"""
polychat: chat messages with a history of translations.

Each sent message keeps its original text plus every translation made while
composing it. A consent gate guards every call to the translation gateway.
"""

from polychat.client import Polychat, AsyncPolychat
from polychat.config import Settings, load_settings
from polychat.consent import ConsentGate
from polychat.draft import DraftSession, DraftState
from polychat.gateway import TranslationGateway
from polychat.store import MessageStore
from polychat.storage import FileStore, MemoryStore
from polychat.models.message import LanguageVariant, Message
from polychat.models.translation import TranslationResult
from polychat.errors import (
    PolychatError,
    ValidationError,
    InvalidRequest,
    ConsentRequired,
    TranslationFailed,
    TranslationInProgress,
    PersistenceError,
)

__version__ = "0.1.0"
__all__ = [
    "Polychat",
    "AsyncPolychat",
    "Settings",
    "load_settings",
    "ConsentGate",
    "DraftSession",
    "DraftState",
    "TranslationGateway",
    "MessageStore",
    "FileStore",
    "MemoryStore",
    "LanguageVariant",
    "Message",
    "TranslationResult",
    "PolychatError",
    "ValidationError",
    "InvalidRequest",
    "ConsentRequired",
    "TranslationFailed",
    "TranslationInProgress",
    "PersistenceError",
]
