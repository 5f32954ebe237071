"""
Review scheduler that applies SM-2 results to stored cards
"""

import logging

from ...spaced_repetition import SpacedRepetitionSystem
from ...utils import get_quality_label, now_ms
from ..storage.deck_store import DeckStore
from ..storage.models import Card

logger = logging.getLogger(__name__)


class ReviewScheduler:
    """Updates a card's scheduling fields after a review"""

    def __init__(self, store: DeckStore, srs_system: SpacedRepetitionSystem):
        self.store = store
        self.srs_system = srs_system

    def review_card(
        self, deck_id: str, card_id: str, quality: int, now: int | None = None
    ) -> Card | None:
        """
        Record a review of one card

        Returns the updated card, or None if deck_id/card_id do not resolve.
        Raises ValueError for a quality outside 0..5 unless clamping is enabled.
        """
        quality = self.srs_system.normalize_quality(quality)
        if now is None:
            now = now_ms()

        with self.store.locked():
            card = self.store.get_card(deck_id, card_id)
            if card is None:
                logger.warning(f"Review skipped: card {card_id} not found in deck {deck_id}")
                return None

            result = self.srs_system.calculate_review(
                quality,
                card.get("repetitions", 0),
                card.get("interval", 0),
                card.get("ease_factor", self.store.settings.default_ease_factor),
                review_time=now,
            )

            card["repetitions"] = result.new_repetitions
            card["interval"] = result.new_interval
            card["ease_factor"] = result.new_ease_factor
            card["next_review"] = result.next_review
            card["last_reviewed"] = result.reviewed_at

            self.store.update_card(deck_id, card)

        logger.info(
            f"Reviewed '{card.get('word')}' in deck {deck_id}: {get_quality_label(quality)}, "
            f"interval={result.new_interval}, ef={result.new_ease_factor:.2f}"
        )
        return card
