"""
Stone Forge - Game Model

Numeric state of the stone and the probability model behind every attempt.
ALL GAME CONSTANTS ARE HARD-CODED.

This module is the single source of truth for:
- Per-feature attempt and success counters
- The rolling success probability (negative feedback, clamped)
- Cumulative statistics of completed rounds
"""

from decimal import Decimal
from typing import Dict, List, Optional, Tuple, Any
import logging
import random

logger = logging.getLogger(__name__)


# =============================================================================
# GAME CONSTANTS
# These are fixed. Nothing at run time can override them.
# =============================================================================

FEATURES = ('A', 'B', 'C')
MAX_ATTEMPTS = 10

MIN_PROBABILITY = Decimal('0.25')
MAX_PROBABILITY = Decimal('0.75')
INITIAL_PROBABILITY = Decimal('0.75')
PROBABILITY_STEP = Decimal('0.10')


# =============================================================================
# EXCEPTIONS
# =============================================================================

class StoneError(Exception):
    """Base exception for model precondition violations."""
    pass


class UnknownFeatureError(StoneError):
    """Raised when a feature id is not one of FEATURES."""
    pass


class FeatureUnavailableError(StoneError):
    """Raised when attempting a feature that already used all its attempts."""
    pass


# =============================================================================
# STONE MODEL
# =============================================================================

def clamp_probability(value: Decimal) -> Decimal:
    """Clamp a probability into [MIN_PROBABILITY, MAX_PROBABILITY]."""
    return max(MIN_PROBABILITY, min(MAX_PROBABILITY, Decimal(value)))


class StoneModel:
    """
    Game state for one process.

    attempts and stone are per-round and reset by reset_round().
    success_probability and statistics live as long as the model.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        # rng wins over seed; either makes attempts reproducible
        self.rng = rng if rng is not None else random.Random(seed)
        self.statistics: Dict[Tuple[int, int], int] = {}
        self.attempts: Dict[str, int] = {}
        self.stone: Dict[str, int] = {}
        self._success_probability = INITIAL_PROBABILITY
        self._initialize()

    def _initialize(self):
        """Zero the per-round counters."""
        self.attempts = {feature: 0 for feature in FEATURES}
        self.stone = {feature: 0 for feature in FEATURES}

    @property
    def success_probability(self) -> Decimal:
        return self._success_probability

    @success_probability.setter
    def success_probability(self, value: Decimal):
        self._success_probability = clamp_probability(value)

    # -------------------------------------------------------------------------
    # ATTEMPTS
    # -------------------------------------------------------------------------

    def attempt(self, feature: str) -> bool:
        """
        Try to improve one feature of the stone.

        A success makes the next success less likely, a failure makes it
        more likely.

        Args:
            feature: One of FEATURES with attempts left

        Returns:
            True if the attempt succeeded
        """
        if feature not in FEATURES:
            raise UnknownFeatureError(f"Unknown feature: {feature!r}")

        if self.attempts[feature] >= MAX_ATTEMPTS:
            raise FeatureUnavailableError(f"No attempts left for feature {feature}")

        self.attempts[feature] += 1

        draw = Decimal(str(self.rng.random()))
        succeeded = draw < self.success_probability

        if succeeded:
            self.stone[feature] += 1
            self.success_probability -= PROBABILITY_STEP
        else:
            self.success_probability += PROBABILITY_STEP

        logger.debug(
            "Attempt on %s: draw=%s success=%s attempts=%d chance=%s",
            feature, draw, succeeded, self.attempts[feature], self.success_probability
        )
        return succeeded

    def available_features(self) -> List[str]:
        """Features that still have attempts left, sorted by id."""
        return sorted(
            feature for feature, count in self.attempts.items()
            if count < MAX_ATTEMPTS
        )

    def is_round_complete(self) -> bool:
        return not self.available_features()

    # -------------------------------------------------------------------------
    # ROUNDS AND STATISTICS
    # -------------------------------------------------------------------------

    def record_round_outcome(self):
        """
        Count the current (A, B) outcome.

        A first occurrence is stored as 0, so the counter holds the number
        of repeats after the first one.
        """
        key = (self.stone['A'], self.stone['B'])
        if key in self.statistics:
            self.statistics[key] += 1
        else:
            self.statistics[key] = 0
        logger.debug("Recorded round outcome %s -> %d", key, self.statistics[key])

    def reset_round(self):
        """Record the finished round and start a new one."""
        self.record_round_outcome()
        self._initialize()
        logger.info("Round reset, success chance carried over: %s", self.success_probability)

    def sorted_statistics(self) -> List[Tuple[Tuple[int, int], int]]:
        """Statistics rows, highest A+B first; ties ordered by the pair, descending."""
        return sorted(
            self.statistics.items(),
            key=lambda row: (row[0][0] + row[0][1], row[0]),
            reverse=True,
        )

    # -------------------------------------------------------------------------
    # SNAPSHOTS
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Plain copy of all numeric state."""
        return {
            'attempts': dict(self.attempts),
            'stone': dict(self.stone),
            'success_probability': self.success_probability,
            'statistics': dict(self.statistics),
        }

    def get_summary(self) -> Dict[str, Any]:
        """Context for the processing screen."""
        return {
            'features': [
                {
                    'name': feature,
                    'attempts': self.attempts[feature],
                    'successes': self.stone[feature],
                }
                for feature in FEATURES
            ],
            'max_attempts': MAX_ATTEMPTS,
            'success_probability': self.success_probability,
            'available': self.available_features(),
            'complete': self.is_round_complete(),
        }


# =============================================================================
# NEW MODEL FACTORY
# =============================================================================

def new_model(seed: Optional[int] = None) -> StoneModel:
    """Create a model with a fresh round and empty statistics."""
    return StoneModel(seed=seed)
