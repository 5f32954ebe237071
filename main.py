#!/usr/bin/env python3
"""
Flashcard deck store
Prints an overview of the stored decks
"""

import logging
from flashdeck.config import get_settings
from flashdeck.storage import init_store
from flashdeck.utils import format_duration


def main():
    """Main application entry point"""
    # Load configuration
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Opening deck store at {settings.storage_path}")

    store = init_store(settings)

    for deck in store.get_deck_names():
        stats = store.get_deck_stats(deck["id"])
        print(
            f"{deck['name']} ({deck['id']}): {stats['total']} cards, "
            f"{stats['due']} due, {stats['mastered']} mastered"
        )

    summary = store.get_session_summary()
    print(
        f"Sessions: {summary['total_sessions']}, "
        f"reviewed {summary['cards_reviewed']} cards, "
        f"accuracy {summary['accuracy']:.1f}%, "
        f"time {format_duration(summary['total_duration'])}"
    )


if __name__ == "__main__":
    main()
