"""
Review session management for a single deck
"""

import logging
from typing import Any

from ...spaced_repetition import PASSING_QUALITY
from ...utils import Timer, calculate_success_rate, format_duration
from ..scheduler.review_scheduler import ReviewScheduler
from ..storage.deck_store import DeckStore
from ..storage.models import Card, ReviewSession

logger = logging.getLogger(__name__)


class ReviewSessionState:
    """Represents a single pass over a deck's due cards"""

    def __init__(self, deck_id: str, cards: list[Card]):
        self.deck_id = deck_id
        self.cards = cards
        self.current_index = 0
        self.reviewed = 0
        self.correct = 0
        self.revealed = False
        self.timer = Timer()

    def get_current_card(self) -> Card | None:
        """Get the card being reviewed"""
        if self.current_index < len(self.cards):
            return self.cards[self.current_index]
        return None

    def advance(self):
        """Move to the next card"""
        self.current_index += 1
        self.revealed = False

    def is_finished(self) -> bool:
        """Check if every due card has been rated"""
        return self.current_index >= len(self.cards)

    def record_answer(self, correct: bool):
        """Record an answer for statistics"""
        self.reviewed += 1
        if correct:
            self.correct += 1


class ReviewSessionDriver:
    """Drives a learner through a deck's due cards and records the session"""

    def __init__(self, store: DeckStore, scheduler: ReviewScheduler, deck_id: str):
        self.store = store
        self.scheduler = scheduler
        self.deck_id = deck_id
        self.state: ReviewSessionState | None = None
        self.saved_session: ReviewSession | None = None

    def start(self, now: int | None = None) -> int:
        """Load the due cards and start timing; returns how many are due"""
        cards = self.store.get_due_cards(self.deck_id, now)
        self.state = ReviewSessionState(self.deck_id, cards)
        self.saved_session = None
        self.state.timer.start()

        if not cards:
            logger.info(f"No cards due in deck {self.deck_id}")
        else:
            logger.info(f"Started review of {len(cards)} cards in deck {self.deck_id}")
        return len(cards)

    def current_card(self) -> Card | None:
        if self.state is None:
            return None
        return self.state.get_current_card()

    def reveal(self) -> Card | None:
        """Reveal the answer side of the current card"""
        card = self.current_card()
        if card is not None:
            self.state.revealed = True
        return card

    def rate(self, quality: int, now: int | None = None) -> Card | None:
        """Rate the current card and move on; saves the session after the last card"""
        if self.state is None:
            raise RuntimeError("Review session has not been started")
        if self.state.is_finished():
            raise RuntimeError("Review session is already finished")

        card = self.state.get_current_card()
        updated = self.scheduler.review_card(self.deck_id, card["id"], quality, now)

        if updated is None:
            logger.warning(f"Card {card['id']} vanished from deck {self.deck_id} mid-session")
        else:
            self.state.record_answer(quality >= PASSING_QUALITY)
        self.state.advance()

        if self.state.is_finished():
            self._finish_session(now)

        return updated

    def progress(self) -> dict[str, Any]:
        """Position and running counts of the current session"""
        if self.state is None:
            return {"position": 0, "total": 0, "remaining": 0, "reviewed": 0, "correct": 0}

        total = len(self.state.cards)
        return {
            "position": min(self.state.current_index + 1, total),
            "total": total,
            "remaining": total - self.state.current_index,
            "reviewed": self.state.reviewed,
            "correct": self.state.correct,
        }

    def is_finished(self) -> bool:
        return self.state is not None and self.state.is_finished()

    def _finish_session(self, now: int | None = None):
        """Stop the timer and append the session to the history"""
        self.state.timer.stop()
        duration = self.state.timer.elapsed_ms() or 0

        sessions = self.store.save_review_session(
            {
                "deck_id": self.deck_id,
                "cards_reviewed": self.state.reviewed,
                "correct_count": self.state.correct,
                "duration": duration,
            },
            now,
        )
        self.saved_session = sessions[-1]

        accuracy = calculate_success_rate(self.state.correct, self.state.reviewed)
        logger.info(
            f"Review of deck {self.deck_id} finished: {self.state.correct}/"
            f"{self.state.reviewed} correct ({accuracy:.1f}%) in {format_duration(duration)}"
        )
