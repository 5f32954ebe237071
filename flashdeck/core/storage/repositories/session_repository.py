"""
Session repository for review session history operations
"""

import logging
from typing import Any

from ....config import Settings
from ....utils import calculate_success_rate, generate_id, now_ms
from ..connection import StorageConnection
from ..models import ReviewSession, SessionSummary

logger = logging.getLogger(__name__)


class SessionRepository:
    """Repository for review session history"""

    def __init__(self, connection: StorageConnection, settings: Settings):
        self.connection = connection
        self.settings = settings

    def load_review_sessions(self) -> list[ReviewSession]:
        """Load the session history, oldest first"""
        result = self.connection.read_json(self.settings.sessions_key)

        if not result.ok:
            logger.warning(f"Failed to load review sessions: {result.error}")
            return []

        sessions = result.unwrap_or([])
        if not isinstance(sessions, list):
            logger.warning("Stored review sessions are not a list, ignoring them")
            return []

        return [s for s in sessions if isinstance(s, dict)]

    def save_review_session(
        self, session_fields: dict[str, Any], now: int | None = None
    ) -> list[ReviewSession]:
        """Append a session record and trim the history to the configured limit"""
        if now is None:
            now = now_ms()

        sessions = self.load_review_sessions()
        sessions.append({**session_fields, "id": generate_id(), "timestamp": now})

        limit = self.settings.session_history_limit
        if len(sessions) > limit:
            del sessions[: len(sessions) - limit]

        result = self.connection.write_json(self.settings.sessions_key, sessions)
        if not result.ok:
            logger.error(f"Failed to save review session: {result.error}")

        return sessions

    def get_session_summary(self, deck_id: str | None = None) -> SessionSummary:
        """Aggregate the stored sessions, optionally for one deck"""
        sessions = self.load_review_sessions()
        if deck_id is not None:
            sessions = [s for s in sessions if s.get("deck_id") == deck_id]

        cards_reviewed = sum(s.get("cards_reviewed", 0) for s in sessions)
        correct_count = sum(s.get("correct_count", 0) for s in sessions)

        return {
            "total_sessions": len(sessions),
            "cards_reviewed": cards_reviewed,
            "correct_count": correct_count,
            "accuracy": round(calculate_success_rate(correct_count, cards_reviewed), 2),
            "total_duration": sum(s.get("duration", 0) for s in sessions),
        }
