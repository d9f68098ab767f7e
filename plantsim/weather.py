# plantsim/weather.py
"""
WeatherModel
------------
Markov-chain weather. Each state carries five integer transition weights
(one per target, in Weather declaration order) summing to 100. A uniform
draw in [0, 100) selects the first target whose cumulative weight exceeds it.

The tables are built once per model and frozen; nothing mutates them after
construction.
"""

import logging
from types import MappingProxyType
from typing import Dict, Tuple

from plantsim.state import WEATHER_ORDER, PlantState, Weather, clamp

logger = logging.getLogger(__name__)

DEFAULT_TRANSITIONS = {
    'sunny': (60, 20, 15, 3, 2),     # likely to stay sunny
    'cloudy': (25, 40, 25, 7, 3),
    'rainy': (15, 30, 40, 10, 5),
    'stormy': (5, 20, 30, 40, 5),
    'drought': (50, 25, 5, 0, 20),   # drought tends to persist
}

DEFAULT_WATER_LOSS = {
    'sunny': 15,
    'cloudy': 10,
    'rainy': 5,
    'stormy': 0,
    'drought': 25,
}

TOTAL_WEIGHT = 100


def _build_table(raw) -> Dict[Weather, Tuple[int, ...]]:
    table = {}
    for weather in WEATHER_ORDER:
        weights = tuple(int(w) for w in raw[weather.value])
        if len(weights) != len(WEATHER_ORDER):
            raise ValueError(f"{weather.value}: expected {len(WEATHER_ORDER)} weights, got {len(weights)}")
        if any(w < 0 for w in weights):
            raise ValueError(f"{weather.value}: negative transition weight in {weights}")
        if sum(weights) != TOTAL_WEIGHT:
            raise ValueError(f"{weather.value}: weights sum to {sum(weights)}, expected {TOTAL_WEIGHT}")
        table[weather] = weights
    return table


class WeatherModel:
    def __init__(self, cfg=None):
        cfg = cfg or {}

        self.transitions = MappingProxyType(_build_table(cfg.get('transitions', DEFAULT_TRANSITIONS)))
        # running sums, e.g. sunny -> (60, 80, 95, 98, 100)
        cumulative = {}
        for weather, weights in self.transitions.items():
            acc, sums = 0, []
            for w in weights:
                acc += w
                sums.append(acc)
            cumulative[weather] = tuple(sums)
        self.cumulative = MappingProxyType(cumulative)

        loss = cfg.get('water_loss', DEFAULT_WATER_LOSS)
        self.water_loss = MappingProxyType({w: int(loss[w.value]) for w in WEATHER_ORDER})

        # Direct effects
        self.rain_water_gain = cfg.get('rain_water_gain', 15)
        self.storm_water_gain = cfg.get('storm_water_gain', 25)
        self.storm_damage = cfg.get('storm_damage', 10)
        self.drought_damage = cfg.get('drought_damage', 5)

    # Transitions ------------------------------------------------------------
    def sample(self, current: Weather, draw: int) -> Weather:
        """Next weather for a draw in [0, 100)."""
        for target, threshold in zip(WEATHER_ORDER, self.cumulative[current]):
            if draw < threshold:
                return target
        # unreachable for draws inside [0, 100)
        return current

    def step(self, state: PlantState, rng) -> Weather:
        """Draw tomorrow's weather, store it and apply its direct effects."""
        previous = state.weather
        state.weather = self.sample(previous, int(rng.integers(0, TOTAL_WEIGHT)))
        if state.weather is not previous:
            logger.debug("Weather %s -> %s", previous.value, state.weather.value)
        self.apply_effects(state)
        return state.weather

    def apply_effects(self, state: PlantState):
        weather = state.weather
        if weather is Weather.RAINY:
            state.water_level = clamp(state.water_level + self.rain_water_gain)
        elif weather is Weather.STORMY:
            state.damage(self.storm_damage)
            state.water_level = clamp(state.water_level + self.storm_water_gain)
        elif weather is Weather.DROUGHT:
            state.damage(self.drought_damage)
        # sunny and cloudy only act through the growth modifier

    def daily_water_loss(self, weather: Weather) -> int:
        return self.water_loss[weather]
