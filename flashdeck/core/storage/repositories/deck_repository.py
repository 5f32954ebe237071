"""
Deck repository for deck and card operations
"""

import logging
from typing import Any

from ....config import Settings
from ....utils import generate_id, normalize_deck_id, now_ms
from ..connection import StorageConnection
from ..models import SCHEDULING_FIELDS, Card, Deck, DeckStats, DeckSummary

logger = logging.getLogger(__name__)


NUMERIC_CARD_FIELDS = (
    "created_at",
    "updated_at",
    "interval",
    "repetitions",
    "next_review",
    "last_reviewed",
    "ease_factor",
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_well_typed_card(card: Card) -> bool:
    """Check that the scheduling fields a card carries have numeric types"""
    return all(_is_number(card[field]) for field in NUMERIC_CARD_FIELDS if field in card)


def _is_due(card: Card, now: int) -> bool:
    """A card without next_review is never due"""
    next_review = card.get("next_review")
    return next_review is not None and next_review <= now


def is_deck_collection(data: Any) -> bool:
    """Check that decoded data has the {deck_id: {name, cards}} shape"""
    if not isinstance(data, dict):
        return False

    for deck in data.values():
        if not isinstance(deck, dict):
            return False
        if not isinstance(deck.get("name"), str):
            return False
        cards = deck.get("cards")
        if not isinstance(cards, list) or not all(isinstance(c, dict) for c in cards):
            return False

    return True


class DeckRepository:
    """Repository for deck-related storage operations"""

    def __init__(self, connection: StorageConnection, settings: Settings):
        self.connection = connection
        self.settings = settings

    def _default_decks(self) -> dict[str, Deck]:
        return {
            self.settings.default_deck_id: {
                "name": self.settings.default_deck_name,
                "cards": [],
            }
        }

    def load_decks(self) -> dict[str, Deck]:
        """Load the deck collection, falling back to a single empty default deck"""
        result = self.connection.read_json(self.settings.decks_key)

        if not result.ok:
            logger.warning(f"Failed to load decks: {result.error}")
            return self._default_decks()

        if result.value is None:
            return self._default_decks()

        if not is_deck_collection(result.value):
            logger.warning("Stored decks have an unexpected shape, ignoring them")
            return self._default_decks()

        return self._drop_corrupt_cards(result.value)

    def _drop_corrupt_cards(self, decks: dict[str, Deck]) -> dict[str, Deck]:
        for deck_id, deck in decks.items():
            cards = [c for c in deck["cards"] if is_well_typed_card(c)]
            dropped = len(deck["cards"]) - len(cards)
            if dropped:
                logger.warning(f"Dropped {dropped} corrupt card(s) from deck {deck_id}")
                deck["cards"] = cards
        return decks

    def save_decks(self, decks: dict[str, Deck]) -> bool:
        """Persist the whole deck collection"""
        result = self.connection.write_json(self.settings.decks_key, decks)
        if not result.ok:
            logger.error(f"Failed to save decks: {result.error}")
            return False
        return True

    def create_deck(self, name: str) -> str:
        """Create a deck named name unless its id is taken; return the id"""
        deck_id = normalize_deck_id(name)
        decks = self.load_decks()

        if deck_id not in decks:
            decks[deck_id] = {"name": name, "cards": []}
            self.save_decks(decks)
            logger.info(f"Created deck {deck_id}")

        return deck_id

    def delete_deck(self, deck_id: str) -> bool:
        """Delete a deck and all its cards"""
        decks = self.load_decks()
        if deck_id not in decks:
            return False

        del decks[deck_id]
        self.save_decks(decks)
        logger.info(f"Deleted deck {deck_id}")
        return True

    def add_card_to_deck(
        self, deck_id: str, card_fields: dict[str, Any], now: int | None = None
    ) -> dict[str, Deck]:
        """Add a card, or merge into the card with the same word"""
        word = card_fields.get("word")
        if not word:
            raise ValueError("Card fields must include a non-empty 'word'")

        if now is None:
            now = now_ms()

        decks = self.load_decks()
        if deck_id not in decks:
            decks[deck_id] = {"name": deck_id, "cards": []}

        cards = decks[deck_id]["cards"]
        fields = {k: v for k, v in card_fields.items() if k not in SCHEDULING_FIELDS}

        index = next((i for i, c in enumerate(cards) if c.get("word") == word), None)
        if index is not None:
            cards[index] = {**cards[index], **fields, "updated_at": now}
            logger.info(f"Updated card '{word}' in deck {deck_id}")
        else:
            cards.append(
                {
                    **fields,
                    "id": generate_id(),
                    "created_at": now,
                    "updated_at": now,
                    "ease_factor": self.settings.default_ease_factor,
                    "interval": 0,
                    "repetitions": 0,
                    "next_review": now,
                }
            )
            logger.info(f"Added card '{word}' to deck {deck_id}")

        self.save_decks(decks)
        return decks

    def remove_card_from_deck(self, deck_id: str, card_id: str) -> dict[str, Deck]:
        """Remove a card by id; unknown deck or card is a no-op"""
        decks = self.load_decks()
        if deck_id in decks:
            decks[deck_id]["cards"] = [
                c for c in decks[deck_id]["cards"] if c.get("id") != card_id
            ]
            self.save_decks(decks)
        return decks

    def get_card(self, deck_id: str, card_id: str) -> Card | None:
        """Get a card by id"""
        deck = self.load_decks().get(deck_id)
        if deck is None:
            return None
        return next((c for c in deck["cards"] if c.get("id") == card_id), None)

    def _check_scheduling_fields(self, card: Card) -> None:
        if not is_well_typed_card(card):
            raise ValueError("Card scheduling fields must be numbers")
        if card.get("ease_factor", self.settings.min_ease_factor) < self.settings.min_ease_factor:
            raise ValueError(
                f"ease_factor must be at least {self.settings.min_ease_factor}, got {card['ease_factor']}"
            )
        for field in ("interval", "repetitions"):
            if card.get(field, 0) < 0:
                raise ValueError(f"{field} must not be negative, got {card[field]}")

    def update_card(self, deck_id: str, card: Card) -> Card | None:
        """
        Write a card back in place, matched by id

        Raises ValueError if the scheduling fields are out of range.
        """
        self._check_scheduling_fields(card)
        decks = self.load_decks()
        deck = decks.get(deck_id)
        if deck is None:
            return None

        for i, existing in enumerate(deck["cards"]):
            if existing.get("id") == card.get("id"):
                deck["cards"][i] = card
                self.save_decks(decks)
                return card

        return None

    def get_deck_cards(self, deck_id: str) -> list[Card]:
        """Get all cards in a deck"""
        deck = self.load_decks().get(deck_id)
        return deck["cards"] if deck else []

    def get_due_cards(self, deck_id: str, now: int | None = None) -> list[Card]:
        """Get cards whose next review time has passed, in deck order"""
        if now is None:
            now = now_ms()
        return [c for c in self.get_deck_cards(deck_id) if _is_due(c, now)]

    def get_deck_stats(self, deck_id: str, now: int | None = None) -> DeckStats | None:
        """Get total/due/mastered/learning counts for a deck"""
        deck = self.load_decks().get(deck_id)
        if deck is None:
            return None

        if now is None:
            now = now_ms()

        cards = deck["cards"]
        due = sum(1 for c in cards if _is_due(c, now))
        mastered = sum(
            1
            for c in cards
            if c.get("repetitions", 0) >= self.settings.mastered_repetitions
        )

        return {
            "total": len(cards),
            "due": due,
            "mastered": mastered,
            "learning": len(cards) - mastered,
        }

    def get_deck_names(self) -> list[DeckSummary]:
        """List decks with their card counts"""
        return [
            {"id": deck_id, "name": deck["name"], "card_count": len(deck["cards"])}
            for deck_id, deck in self.load_decks().items()
        ]
