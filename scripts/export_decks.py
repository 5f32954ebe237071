#!/usr/bin/env python3
"""
Export decks and review sessions from a deck store to JSON
"""

import json
import sys
from datetime import datetime
from pathlib import Path

from flashdeck.config import Settings, get_settings
from flashdeck.core.storage.connection import StorageConnection
from flashdeck.core.storage.repositories.deck_repository import is_deck_collection


def export_decks_data(db_path: str, output_path: str, settings: Settings | None = None) -> bool:
    """Export the stored deck collection and session history to JSON"""
    settings = settings or get_settings()
    connection = StorageConnection(db_path)

    print(f"📖 Exporting decks from {db_path}")

    decks_result = connection.read_json(settings.decks_key)
    sessions_result = connection.read_json(settings.sessions_key)
    for result in (decks_result, sessions_result):
        if not result.ok:
            print(f"❌ Export failed: {result.error}")
            return False

    decks = decks_result.unwrap_or({})
    sessions = sessions_result.unwrap_or([])
    if not is_deck_collection(decks) or not isinstance(sessions, list):
        print("❌ Export failed: stored data has an unexpected structure")
        return False

    total_cards = sum(len(deck.get("cards", [])) for deck in decks.values())
    print(f"  📝 Found {len(decks)} decks with {total_cards} cards")
    print(f"  📈 Found {len(sessions)} review sessions")

    export_data = {
        "export_info": {
            "exported_at": datetime.now().isoformat(),
            "database_path": db_path,
            "script_version": "1.0",
        },
        "decks": decks,
        "review_sessions": sessions,
        "statistics": {
            "total_decks": len(decks),
            "total_cards": total_cards,
            "total_sessions": len(sessions),
        },
    }

    try:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(export_data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        print(f"❌ Export failed: {e}")
        return False

    print(f"✅ Successfully exported data to {output_path}")
    return True


def main():
    """Main export function"""
    if len(sys.argv) != 3:
        print("Usage: python export_decks.py <database_path> <output_json_path>")
        print("Example: python export_decks.py data/flashdeck.db data/decks_backup.json")
        sys.exit(1)

    db_path = sys.argv[1]
    output_path = sys.argv[2]

    if not Path(db_path).exists():
        print(f"❌ Database file not found: {db_path}")
        sys.exit(1)

    if export_decks_data(db_path, output_path):
        print("🎉 Export completed successfully!")
        sys.exit(0)
    else:
        print("💥 Export failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
