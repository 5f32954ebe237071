"""
Spaced Repetition System implementation using SuperMemo 2 algorithm
"""

import logging
import math
from dataclasses import dataclass

from .config import Settings
from .utils import MS_PER_DAY, now_ms, validate_quality

logger = logging.getLogger(__name__)

# Quality at or above this counts as a successful recall
PASSING_QUALITY = 3
MAX_QUALITY = 5


@dataclass
class ReviewResult:
    """Result of a spaced repetition review"""

    new_interval: int
    new_repetitions: int
    new_ease_factor: float
    next_review: int
    reviewed_at: int

    @property
    def is_successful(self) -> bool:
        return self.new_repetitions > 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for positive values"""
    return int(math.floor(value + 0.5))


class SpacedRepetitionSystem:
    """SuperMemo 2 spaced repetition algorithm implementation"""

    def __init__(self, settings: Settings):
        self.min_ease = settings.min_ease_factor
        self.clamp_quality = settings.clamp_quality

    def normalize_quality(self, quality: int) -> int:
        """
        Check a quality score against the 0..5 range

        Integers outside the range are clamped when clamp_quality is set,
        anything else raises ValueError.
        """
        valid = validate_quality(quality)
        if valid is not None:
            return valid

        if self.clamp_quality and isinstance(quality, int) and not isinstance(quality, bool):
            clamped = max(0, min(MAX_QUALITY, quality))
            logger.warning(f"Quality {quality} out of range, clamped to {clamped}")
            return clamped

        raise ValueError(f"Quality must be an integer between 0 and 5, got {quality!r}")

    def calculate_review(
        self,
        quality: int,
        repetitions: int,
        interval: int,
        ease_factor: float,
        review_time: int | None = None,
    ) -> ReviewResult:
        """
        Calculate next review based on SuperMemo 2 algorithm

        Args:
            quality: Recall quality (0-2 = failed, 3-5 = recalled, 5 = easiest)
            repetitions: Consecutive successful reviews so far
            interval: Current interval in days
            ease_factor: Current ease factor
            review_time: Review time in epoch milliseconds (defaults to now)

        Returns:
            ReviewResult with new parameters
        """
        quality = self.normalize_quality(quality)
        if review_time is None:
            review_time = now_ms()

        if repetitions < 0 or interval < 0 or ease_factor < self.min_ease:
            logger.warning(
                f"Out-of-range scheduling state clamped: reps={repetitions}, "
                f"interval={interval}, ef={ease_factor}"
            )
            repetitions = max(0, repetitions)
            interval = max(0, interval)
            ease_factor = max(self.min_ease, ease_factor)

        logger.debug(
            f"Calculating review: quality={quality}, reps={repetitions}, "
            f"interval={interval}, ef={ease_factor}"
        )

        if quality < PASSING_QUALITY:
            new_repetitions = 0
            new_interval = 0
        else:
            new_interval = self._calculate_new_interval(repetitions, interval, ease_factor)
            new_repetitions = repetitions + 1

        result = ReviewResult(
            new_interval=new_interval,
            new_repetitions=new_repetitions,
            new_ease_factor=self._calculate_new_ease(quality, ease_factor),
            next_review=review_time + new_interval * MS_PER_DAY,
            reviewed_at=review_time,
        )

        logger.debug(
            f"Review result: interval={result.new_interval}, "
            f"reps={result.new_repetitions}, ef={result.new_ease_factor}"
        )

        return result

    def _calculate_new_interval(
        self, repetitions: int, current_interval: int, ease_factor: float
    ) -> int:
        """Interval after a successful review, from the pre-increment repetition count"""
        if repetitions == 0:
            return 1
        elif repetitions == 1:
            return 6
        else:
            return round_half_up(current_interval * ease_factor)

    def _calculate_new_ease(self, quality: int, current_ease: float) -> float:
        """SM-2 ease adjustment, floored at the minimum ease factor"""
        penalty = MAX_QUALITY - quality
        new_ease = current_ease + (0.1 - penalty * (0.08 + penalty * 0.02))
        return max(self.min_ease, new_ease)
