# tests/helpers.py
"""Scripted random sources and a tick helper shared by the test modules."""

import threading


class ScriptedRng:
    """Replays queued draws; every draw must fall inside the requested range."""

    def __init__(self, draws=()):
        self.draws = list(draws)
        self.calls = []

    def push(self, *values):
        self.draws.extend(values)

    def integers(self, low, high=None):
        if high is None:
            low, high = 0, low
        if not self.draws:
            raise AssertionError(f"unexpected draw in [{low}, {high})")
        value = self.draws.pop(0)
        assert low <= value < high, f"scripted draw {value} outside [{low}, {high})"
        self.calls.append((low, high, value))
        return value


class GatedRng(ScriptedRng):
    """ScriptedRng whose first draw blocks until `release()` is called."""

    def __init__(self, draws=()):
        super().__init__(draws)
        self.entered = threading.Event()
        self._gate = threading.Event()

    def release(self):
        self._gate.set()

    def integers(self, low, high=None):
        self.entered.set()
        self._gate.wait(timeout=5)
        return super().integers(low, high)


def tick(game, *draws):
    """Queue `draws`, run one day and wait for it to land."""
    game.rng.push(*draws)
    game.advance_day()
    assert game.wait_idle(timeout=5)
