"""
Shared fixtures: scripted random sources and buffered displays.
"""

import pytest

from display import BufferedDisplay
from model import StoneModel
from screens import ScreenRenderer
from state_machine import StateMachine


class ScriptedRandom:
    """random.Random stand-in that replays fixed draws, cycling when exhausted."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = 0

    def random(self):
        value = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return value


@pytest.fixture
def scripted_model():
    """Factory for a model whose attempts use the given draws."""
    def _make(*draws):
        return StoneModel(rng=ScriptedRandom(draws))
    return _make


@pytest.fixture
def display():
    return BufferedDisplay()


@pytest.fixture
def renderer():
    return ScreenRenderer()


@pytest.fixture
def machine_for(display, renderer):
    """Factory for a state machine around a given model."""
    def _make(model):
        return StateMachine(model=model, display=display, renderer=renderer)
    return _make
