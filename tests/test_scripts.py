"""
Tests for the export and import scripts
"""

import json

import pytest

from flashdeck.config import Settings
from flashdeck.storage import create_scheduler, init_store
from scripts.export_decks import export_decks_data
from scripts.import_decks import import_decks_data

NOW = 1_700_000_000_000


class TestExportImport:
    """Test backing up and restoring a deck store"""

    @pytest.fixture
    def settings(self):
        return Settings()

    @pytest.fixture
    def source_db(self, tmp_path, settings):
        """Store with a reviewed card and one saved session"""
        db_path = str(tmp_path / "source.db")
        store = init_store(settings, db_path)
        store.add_card_to_deck("default", {"word": "ocean", "translation": "océano"}, now=NOW)
        card_id = store.get_deck_cards("default")[0]["id"]
        create_scheduler(store).review_card("default", card_id, 3, now=NOW)
        store.save_review_session({"deck_id": "default", "cards_reviewed": 1, "correct_count": 1}, now=NOW)
        return db_path

    def test_export(self, source_db, tmp_path, settings):
        output = tmp_path / "backup" / "decks.json"

        assert export_decks_data(source_db, str(output), settings) is True

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["statistics"] == {"total_decks": 1, "total_cards": 1, "total_sessions": 1}
        card = data["decks"]["default"]["cards"][0]
        assert card["translation"] == "océano"
        assert card["ease_factor"] == pytest.approx(2.36)
        assert card["next_review"] == NOW + 86_400_000

    def test_round_trip(self, source_db, tmp_path, settings):
        output = tmp_path / "decks.json"
        target_db = str(tmp_path / "target.db")

        assert export_decks_data(source_db, str(output), settings) is True
        assert import_decks_data(str(output), target_db, settings) is True

        source = init_store(settings, source_db)
        target = init_store(settings, target_db)
        assert target.load_decks() == source.load_decks()
        assert target.load_review_sessions() == source.load_review_sessions()

    def test_export_uninitialized_database_fails(self, tmp_path, settings, capsys):
        assert export_decks_data(str(tmp_path / "empty.db"), str(tmp_path / "out.json"), settings) is False
        assert "Export failed" in capsys.readouterr().out

    def test_import_rejects_bad_structure(self, tmp_path, settings):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"decks": {"x": {"cards": []}}}), encoding="utf-8")

        assert import_decks_data(str(bad), str(tmp_path / "target.db"), settings) is False

    def test_import_rejects_non_object_file(self, tmp_path, settings, capsys):
        bad = tmp_path / "list.json"
        bad.write_text(json.dumps([1, 2]), encoding="utf-8")

        assert import_decks_data(str(bad), str(tmp_path / "target.db"), settings) is False
        assert "must contain a JSON object" in capsys.readouterr().out

    def test_import_rejects_corrupt_card_fields(self, tmp_path, settings):
        bad = tmp_path / "bad.json"
        bad.write_text(
            json.dumps(
                {"decks": {"default": {"name": "D", "cards": [{"word": "w", "next_review": "tomorrow"}]}}}
            ),
            encoding="utf-8",
        )

        assert import_decks_data(str(bad), str(tmp_path / "target.db"), settings) is False

    @pytest.mark.parametrize(
        "decks, sessions",
        [([1, 2, 3], []), ({"default": {"name": "D", "cards": []}}, {"not": "a list"})],
    )
    def test_export_rejects_wrong_shaped_data(self, tmp_path, settings, capsys, decks, sessions):
        db_path = str(tmp_path / "odd.db")
        store = init_store(settings, db_path)
        store.connection.write_json(settings.decks_key, decks)
        store.connection.write_json(settings.sessions_key, sessions)
        output = tmp_path / "out.json"

        assert export_decks_data(db_path, str(output), settings) is False
        assert "unexpected structure" in capsys.readouterr().out
        assert not output.exists()

    def test_import_rejects_invalid_json(self, tmp_path, settings):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")

        assert import_decks_data(str(bad), str(tmp_path / "target.db"), settings) is False

    def test_import_trims_session_history(self, tmp_path):
        settings = Settings(session_history_limit=2)
        source = tmp_path / "in.json"
        source.write_text(
            json.dumps(
                {
                    "decks": {"default": {"name": "My Vocabulary", "cards": []}},
                    "review_sessions": [{"id": str(i), "cards_reviewed": i} for i in range(5)],
                }
            ),
            encoding="utf-8",
        )
        target_db = str(tmp_path / "target.db")

        assert import_decks_data(str(source), target_db, settings) is True
        sessions = init_store(settings, target_db).load_review_sessions()
        assert [s["cards_reviewed"] for s in sessions] == [3, 4]
