"""
Storage entry points for the flashcard deck store
"""

from .config import Settings, get_settings
from .core.scheduler.review_scheduler import ReviewScheduler
from .core.storage.deck_store import DeckStore
from .spaced_repetition import SpacedRepetitionSystem


def init_store(settings: Settings | None = None, db_path: str | None = None) -> DeckStore:
    """Create a deck store and initialize its tables"""
    store = DeckStore(settings or get_settings(), db_path)
    store.init_storage()
    return store


def create_scheduler(store: DeckStore) -> ReviewScheduler:
    """Create a review scheduler sharing the store's settings"""
    return ReviewScheduler(store, SpacedRepetitionSystem(store.settings))


# Clean exports
__all__ = ['DeckStore', 'ReviewScheduler', 'create_scheduler', 'init_store']
