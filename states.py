"""
Screen states for Stone Forge.

Each state is one screen: it knows which keys it accepts, what it shows,
and which state follows a key. States only hold the shared model.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, List
import logging

from model import StoneModel
from screens import ScreenRenderer

logger = logging.getLogger(__name__)


# =============================================================================
# KEY BINDINGS
# =============================================================================

START_KEY = 'S'
STATS_KEY = 'G'

ANY_KEY: FrozenSet[str] = frozenset()


# =============================================================================
# STATE INTERFACE
# =============================================================================

class GameScreen(ABC):
    """
    Interface for a screen of the game.

    An empty accepted_inputs() set means every key is accepted.
    """

    model: StoneModel

    @abstractmethod
    def accepted_inputs(self) -> FrozenSet[str]:
        pass

    @abstractmethod
    def render(self, renderer: ScreenRenderer) -> List[str]:
        """Lines to show for this screen."""
        pass

    @abstractmethod
    def next(self, key: str) -> 'GameScreen':
        """
        Compute the state that follows key.

        May mutate the model. Callers must validate key first.
        """
        pass


# =============================================================================
# STATES
# =============================================================================

class InitialState(GameScreen):
    """Home screen: start a round or look at statistics."""

    def __init__(self, model: StoneModel):
        self.model = model

    def accepted_inputs(self) -> FrozenSet[str]:
        return frozenset((START_KEY, STATS_KEY))

    def render(self, renderer: ScreenRenderer) -> List[str]:
        return renderer.render_lines('initial.txt', {
            'start_key': START_KEY,
            'stats_key': STATS_KEY,
        })

    def next(self, key: str) -> GameScreen:
        if key == START_KEY:
            return ProcessingState(self.model)
        return StatisticsState(self.model)


class ProcessingState(GameScreen):
    """
    Round in progress.

    Accepts the features that still have attempts left. Once every feature
    is used up the set is empty, so the next key of any kind closes the
    round.
    """

    def __init__(self, model: StoneModel):
        self.model = model

    def accepted_inputs(self) -> FrozenSet[str]:
        return frozenset(self.model.available_features())

    def render(self, renderer: ScreenRenderer) -> List[str]:
        return renderer.render_lines('processing.txt', self.model.get_summary())

    def next(self, key: str) -> GameScreen:
        if not self.model.is_round_complete():
            self.model.attempt(key)
            return ProcessingState(self.model)

        # reset_round() records the outcome a second time
        self.model.record_round_outcome()
        self.model.reset_round()
        logger.info("Round complete, statistics now hold %d outcomes", len(self.model.statistics))
        return InitialState(self.model)


class StatisticsState(GameScreen):
    """Completed round outcomes, best first. Any key goes home."""

    def __init__(self, model: StoneModel):
        self.model = model

    def accepted_inputs(self) -> FrozenSet[str]:
        return ANY_KEY

    def render(self, renderer: ScreenRenderer) -> List[str]:
        return renderer.render_lines('statistics.txt', {
            'rows': self.model.sorted_statistics(),
        })

    def next(self, key: str) -> GameScreen:
        return InitialState(self.model)
