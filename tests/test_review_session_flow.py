"""
Test complete review session flow to verify progress persistence
"""

import pytest

from flashdeck.config import Settings
from flashdeck.core.session.session_manager import ReviewSessionDriver, ReviewSessionState
from flashdeck.storage import create_scheduler, init_store

NOW = 1_700_000_000_000


class TestReviewSessionState:
    """Test the per-session counters"""

    def test_walks_through_cards(self):
        state = ReviewSessionState("default", [{"id": "1"}, {"id": "2"}])

        assert state.get_current_card() == {"id": "1"}
        state.record_answer(True)
        state.advance()
        assert state.get_current_card() == {"id": "2"}
        state.record_answer(False)
        state.advance()

        assert state.is_finished()
        assert state.get_current_card() is None
        assert (state.reviewed, state.correct) == (2, 1)


class TestReviewSessionFlow:
    """Test complete review session flow"""

    @pytest.fixture
    def store(self, tmp_path):
        """Test store with a temporary database"""
        store = init_store(Settings(storage_url=f"sqlite:///{tmp_path / 'session.db'}"))
        for word, translation in [("haus", "house"), ("gehen", "to go"), ("schön", "beautiful")]:
            store.add_card_to_deck("default", {"word": word, "translation": translation}, now=NOW)
        return store

    @pytest.fixture
    def driver(self, store):
        return ReviewSessionDriver(store, create_scheduler(store), "default")

    def test_review_session_removes_cards_from_due_list(self, driver, store):
        """Rated cards leave the due list, failed ones stay"""
        assert driver.start(now=NOW) == 3

        driver.rate(3, now=NOW)
        driver.rate(5, now=NOW)
        driver.rate(0, now=NOW)

        due = store.get_due_cards("default", now=NOW)
        assert [c["word"] for c in due] == ["schön"]

    def test_session_summary_saved_once(self, driver, store):
        driver.start(now=NOW)
        for quality in (0, 2, 3):
            assert store.load_review_sessions() == []
            driver.rate(quality, now=NOW)

        sessions = store.load_review_sessions()
        assert len(sessions) == 1
        assert sessions[0]["deck_id"] == "default"
        assert sessions[0]["cards_reviewed"] == 3
        assert sessions[0]["correct_count"] == 1
        assert sessions[0]["duration"] >= 0
        assert sessions[0]["timestamp"] == NOW
        assert driver.saved_session == sessions[0]
        assert driver.is_finished()

    def test_reveal_and_progress(self, driver):
        driver.start(now=NOW)

        assert driver.progress() == {"position": 1, "total": 3, "remaining": 3, "reviewed": 0, "correct": 0}
        card = driver.reveal()
        assert card["word"] == "haus"
        assert driver.state.revealed is True

        driver.rate(5, now=NOW)
        assert driver.state.revealed is False
        assert driver.current_card()["word"] == "gehen"
        assert driver.progress() == {"position": 2, "total": 3, "remaining": 2, "reviewed": 1, "correct": 1}

    def test_rate_returns_updated_card(self, driver):
        driver.start(now=NOW)
        updated = driver.rate(3, now=NOW)

        assert updated["word"] == "haus"
        assert updated["repetitions"] == 1
        assert updated["interval"] == 1

    def test_empty_deck(self, store):
        store.create_deck("Empty")
        driver = ReviewSessionDriver(store, create_scheduler(store), "empty")

        assert driver.start(now=NOW) == 0
        assert driver.current_card() is None
        assert driver.reveal() is None
        assert driver.is_finished()
        assert store.load_review_sessions() == []

        with pytest.raises(RuntimeError):
            driver.rate(3)

    def test_rate_before_start(self, driver):
        assert driver.current_card() is None
        assert driver.progress()["total"] == 0
        with pytest.raises(RuntimeError):
            driver.rate(3)

    def test_rate_after_finish(self, driver, store):
        driver.start(now=NOW)
        for _ in range(3):
            driver.rate(5, now=NOW)

        with pytest.raises(RuntimeError):
            driver.rate(5, now=NOW)
        assert len(store.load_review_sessions()) == 1

    def test_invalid_quality_does_not_advance(self, driver):
        driver.start(now=NOW)

        with pytest.raises(ValueError):
            driver.rate(9, now=NOW)

        assert driver.current_card()["word"] == "haus"
        assert driver.progress()["reviewed"] == 0

    def test_card_removed_mid_session_is_not_counted(self, driver, store):
        driver.start(now=NOW)
        gehen = store.get_deck_cards("default")[1]
        driver.rate(5, now=NOW)
        store.remove_card_from_deck("default", gehen["id"])

        assert driver.rate(5, now=NOW) is None
        assert driver.progress()["reviewed"] == 1
        driver.rate(0, now=NOW)

        sessions = store.load_review_sessions()
        assert sessions[0]["cards_reviewed"] == 2
        assert sessions[0]["correct_count"] == 1

    def test_second_session_only_sees_failed_cards(self, driver, store):
        driver.start(now=NOW)
        for quality in (5, 0, 3):
            driver.rate(quality, now=NOW)

        assert driver.start(now=NOW) == 1
        assert driver.current_card()["word"] == "gehen"
        driver.rate(3, now=NOW)

        assert len(store.load_review_sessions()) == 2
        assert store.get_session_summary("default")["cards_reviewed"] == 4
