"""
Storage models for the flashcard deck store
"""

from typing import TypedDict


class Card(TypedDict, total=False):
    """Card model; learner-supplied fields beyond these are kept as-is"""
    id: str
    word: str
    translation: str
    phonetic: str
    target_language: str
    native_language: str
    ease_factor: float
    interval: int
    repetitions: int
    next_review: int
    last_reviewed: int
    created_at: int
    updated_at: int


class Deck(TypedDict):
    """Deck model"""
    name: str
    cards: list[Card]


class ReviewSession(TypedDict, total=False):
    """Review session model"""
    id: str
    timestamp: int
    deck_id: str
    cards_reviewed: int
    correct_count: int
    duration: int


class DeckStats(TypedDict):
    """Deck statistics model"""
    total: int
    due: int
    mastered: int
    learning: int


class DeckSummary(TypedDict):
    """Deck listing entry"""
    id: str
    name: str
    card_count: int


class SessionSummary(TypedDict):
    """Aggregate over the review session history"""
    total_sessions: int
    cards_reviewed: int
    correct_count: int
    accuracy: float
    total_duration: int


# Fields owned by the store and scheduler, never taken from caller input
SCHEDULING_FIELDS = frozenset(
    {
        "id",
        "created_at",
        "updated_at",
        "ease_factor",
        "interval",
        "repetitions",
        "next_review",
        "last_reviewed",
    }
)
