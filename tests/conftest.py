# tests/conftest.py
import pytest

from helpers import ScriptedRng
from plantsim.game import PlantGame


@pytest.fixture
def rng():
    return ScriptedRng()


@pytest.fixture
def game(rng):
    """Fresh game driven by the scripted draws in `rng`."""
    return PlantGame(rng=rng)
