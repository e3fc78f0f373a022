"""
State machine driver for Stone Forge.

Holds the single live screen, gates keys against it and re-renders after
every accepted key.
"""

from typing import Optional
import logging

from display import Display, create_display
from model import StoneModel
from screens import ScreenRenderer, get_screen_renderer
from states import GameScreen, InitialState

logger = logging.getLogger(__name__)


class StateMachine:
    """
    Owns the model and the current screen.

    The model is lent to whichever state is live; only one state is live
    at a time.
    """

    def __init__(
        self,
        model: Optional[StoneModel] = None,
        display: Optional[Display] = None,
        renderer: Optional[ScreenRenderer] = None
    ):
        self._model = model or StoneModel()
        self.display = display or create_display('console')
        self.renderer = renderer or get_screen_renderer()
        self._state: GameScreen = InitialState(self._model)
        self.render()

    @property
    def model(self) -> StoneModel:
        return self._model

    @property
    def state(self) -> GameScreen:
        return self._state

    def process(self, key: str) -> bool:
        """
        Feed one key to the current screen.

        Returns:
            False if the key was rejected, True if the state advanced
        """
        accepted = self._state.accepted_inputs()
        if accepted and key not in accepted:
            logger.debug("Rejected key %r in %s", key, type(self._state).__name__)
            self.display.write_lines(self.renderer.render_lines('wrong_input.txt', {'key': key}))
            return False

        previous = type(self._state).__name__
        self._state = self._state.next(key)
        logger.debug("Key %r: %s -> %s", key, previous, type(self._state).__name__)
        self.render()
        return True

    def render(self):
        """Clear the display and render the current screen."""
        self.display.clear()
        self.display.write_lines(self._state.render(self.renderer))
