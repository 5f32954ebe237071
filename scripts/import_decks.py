#!/usr/bin/env python3
"""
Import decks and review sessions from a JSON export into a deck store
"""

import json
import sys
from pathlib import Path

from flashdeck.config import Settings, get_settings
from flashdeck.core.storage.connection import StorageConnection
from flashdeck.core.storage.repositories.deck_repository import (
    is_deck_collection,
    is_well_typed_card,
)


def import_decks_data(json_path: str, db_path: str, settings: Settings | None = None) -> bool:
    """Replace the stored decks and session history with the contents of an export"""
    settings = settings or get_settings()

    print(f"📖 Loading data from {json_path}")
    try:
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ Import failed: {e}")
        return False

    if not isinstance(data, dict):
        print("❌ Import failed: export file must contain a JSON object")
        return False

    decks = data.get('decks', {})
    sessions = data.get('review_sessions', [])

    if not is_deck_collection(decks) or not isinstance(sessions, list):
        print("❌ Import failed: export file has an unexpected structure")
        return False

    if not all(is_well_typed_card(c) for deck in decks.values() for c in deck["cards"]):
        print("❌ Import failed: export file contains cards with non-numeric scheduling fields")
        return False

    print(f"  📝 Loaded {len(decks)} decks")
    print(f"  📈 Loaded {len(sessions)} review sessions")

    connection = StorageConnection(db_path)
    if not connection.init_storage():
        print(f"❌ Import failed: cannot initialize storage at {db_path}")
        return False

    sessions = sessions[-settings.session_history_limit:]
    for key, value in ((settings.decks_key, decks), (settings.sessions_key, sessions)):
        result = connection.write_json(key, value)
        if not result.ok:
            print(f"❌ Import failed: {result.error}")
            return False

    print(f"✅ Successfully imported data into {db_path}")
    return True


def main():
    """Main import function"""
    if len(sys.argv) != 3:
        print("Usage: python import_decks.py <input_json_path> <database_path>")
        print("Example: python import_decks.py data/decks_backup.json data/flashdeck.db")
        sys.exit(1)

    json_path = sys.argv[1]
    db_path = sys.argv[2]

    if not Path(json_path).exists():
        print(f"❌ JSON file not found: {json_path}")
        sys.exit(1)

    if import_decks_data(json_path, db_path):
        print("🎉 Import completed successfully!")
        sys.exit(0)
    else:
        print("💥 Import failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
