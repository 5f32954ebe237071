"""
Utility functions for the flashcard deck store
"""

import logging
import re
import time
import uuid
from typing import Any

logger = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000


def normalize_deck_id(name: str) -> str:
    """Derive a deck id from a deck name: lower-case, whitespace runs to underscores"""
    if not name or not name.strip():
        raise ValueError("Deck name must not be empty")

    return re.sub(r"\s+", "_", name.strip().lower())


def now_ms() -> int:
    """Current time as epoch milliseconds"""
    return int(time.time() * 1000)


def generate_id() -> str:
    """Generate a unique record id"""
    return uuid.uuid4().hex


def validate_quality(quality: Any) -> int | None:
    """Validate a review quality value, returning None if it is not an int in 0..5"""
    if isinstance(quality, bool) or not isinstance(quality, int):
        return None
    if 0 <= quality <= 5:
        return quality
    return None


def get_quality_label(quality: int) -> str:
    """Get the review button label for a quality score"""
    labels = {0: "Again", 2: "Hard", 3: "Good", 5: "Easy"}
    return labels.get(quality, str(quality))


def calculate_success_rate(correct: int, total: int) -> float:
    """Calculate success rate as percentage"""
    if total == 0:
        return 0.0
    return (correct / total) * 100.0


def format_duration(milliseconds: int) -> str:
    """Format duration in human-readable format"""
    seconds = milliseconds // 1000
    if seconds < 60:
        return f"{seconds}s"
    elif seconds < 3600:
        minutes = seconds // 60
        return f"{minutes}m"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        return f"{hours}h {minutes}m"


class Timer:
    """Simple timer for measuring duration"""

    def __init__(self):
        self.start_time = None
        self.end_time = None

    def start(self):
        """Start the timer"""
        self.start_time = time.time()
        self.end_time = None

    def stop(self):
        """Stop the timer"""
        if self.start_time is not None:
            self.end_time = time.time()

    def elapsed(self) -> float | None:
        """Get elapsed time in seconds"""
        if self.start_time is None:
            return None

        end = self.end_time or time.time()
        return end - self.start_time

    def elapsed_ms(self) -> int | None:
        """Get elapsed time in milliseconds"""
        elapsed = self.elapsed()
        return int(elapsed * 1000) if elapsed is not None else None
