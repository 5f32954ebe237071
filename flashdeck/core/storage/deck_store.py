"""
Unified deck store that coordinates all repositories
"""

import logging
import threading
from typing import Any

from ...config import Settings
from .connection import StorageConnection
from .models import Card, Deck, DeckStats, DeckSummary, ReviewSession, SessionSummary
from .repositories.deck_repository import DeckRepository
from .repositories.session_repository import SessionRepository

logger = logging.getLogger(__name__)


class DeckStore:
    """Unified deck store; every call runs under one lock per instance"""

    def __init__(self, settings: Settings, db_path: str | None = None):
        self.settings = settings
        self.connection = StorageConnection(db_path or settings.storage_path)
        self.deck_repo = DeckRepository(self.connection, settings)
        self.session_repo = SessionRepository(self.connection, settings)
        self._lock = threading.RLock()

    def init_storage(self) -> bool:
        """Initialize storage tables"""
        return self.connection.init_storage()

    def locked(self) -> threading.RLock:
        """Lock to hold across a multi-step read-modify-write"""
        return self._lock

    # Deck methods
    def load_decks(self) -> dict[str, Deck]:
        with self._lock:
            return self.deck_repo.load_decks()

    def save_decks(self, decks: dict[str, Deck]) -> bool:
        with self._lock:
            return self.deck_repo.save_decks(decks)

    def create_deck(self, name: str) -> str:
        with self._lock:
            return self.deck_repo.create_deck(name)

    def delete_deck(self, deck_id: str) -> bool:
        with self._lock:
            return self.deck_repo.delete_deck(deck_id)

    def get_deck_names(self) -> list[DeckSummary]:
        with self._lock:
            return self.deck_repo.get_deck_names()

    def get_deck_stats(self, deck_id: str, now: int | None = None) -> DeckStats | None:
        with self._lock:
            return self.deck_repo.get_deck_stats(deck_id, now)

    # Card methods
    def add_card_to_deck(
        self, deck_id: str, card_fields: dict[str, Any], now: int | None = None
    ) -> dict[str, Deck]:
        with self._lock:
            return self.deck_repo.add_card_to_deck(deck_id, card_fields, now)

    def remove_card_from_deck(self, deck_id: str, card_id: str) -> dict[str, Deck]:
        with self._lock:
            return self.deck_repo.remove_card_from_deck(deck_id, card_id)

    def get_card(self, deck_id: str, card_id: str) -> Card | None:
        with self._lock:
            return self.deck_repo.get_card(deck_id, card_id)

    def update_card(self, deck_id: str, card: Card) -> Card | None:
        with self._lock:
            return self.deck_repo.update_card(deck_id, card)

    def get_deck_cards(self, deck_id: str) -> list[Card]:
        with self._lock:
            return self.deck_repo.get_deck_cards(deck_id)

    def get_due_cards(self, deck_id: str, now: int | None = None) -> list[Card]:
        with self._lock:
            return self.deck_repo.get_due_cards(deck_id, now)

    # Session methods
    def save_review_session(
        self, session_fields: dict[str, Any], now: int | None = None
    ) -> list[ReviewSession]:
        with self._lock:
            return self.session_repo.save_review_session(session_fields, now)

    def load_review_sessions(self) -> list[ReviewSession]:
        with self._lock:
            return self.session_repo.load_review_sessions()

    def get_session_summary(self, deck_id: str | None = None) -> SessionSummary:
        with self._lock:
            return self.session_repo.get_session_summary(deck_id)
