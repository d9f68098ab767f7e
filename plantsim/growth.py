# plantsim/growth.py
"""
GrowthModel
-----------
Converts the day's conditions into growth points and stage transitions.

    base   = water // 25 + nutrients // 30          (integer floors first)
    growth = int(base * f_weather * f_temp * f_pest * f_disease)

f_disease = 1 - 0.5 * diseased / total leaves, only when the plant has leaves.
A stage advances at most one step per tick, however far past its threshold
the points land.
"""

import logging

from plantsim.state import STAGE_ORDER, WEATHER_ORDER, PlantState

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLDS = {
    'seed': 10,
    'sprout': 30,
    'young': 60,
    'mature': 100,
}

DEFAULT_WEATHER_MULTIPLIERS = {
    'sunny': 1.2,
    'cloudy': 0.8,
    'rainy': 1.0,
    'stormy': 0.5,
    'drought': 0.3,
}


class GrowthModel:
    def __init__(self, cfg=None):
        cfg = cfg or {}

        # Eligibility (strictly above)
        self.min_health = cfg.get('min_health', 50)
        self.min_water = cfg.get('min_water', 20)
        self.min_nutrient = cfg.get('min_nutrient', 15)

        # Base amount divisors
        self.water_divisor = cfg.get('water_divisor', 25)
        self.nutrient_divisor = cfg.get('nutrient_divisor', 30)

        # Multipliers
        mult = cfg.get('weather_multipliers', DEFAULT_WEATHER_MULTIPLIERS)
        self.weather_multipliers = {w: float(mult[w.value]) for w in WEATHER_ORDER}
        self.optimal_temp = tuple(cfg.get('optimal_temp', (18, 28)))
        self.temp_optimal_multiplier = cfg.get('temp_optimal_multiplier', 1.2)
        self.temp_stress_multiplier = cfg.get('temp_stress_multiplier', 0.7)
        self.pest_multiplier = cfg.get('pest_multiplier', 0.5)
        self.disease_weight = cfg.get('disease_weight', 0.5)

        thresholds = cfg.get('thresholds', DEFAULT_THRESHOLDS)
        # flowering has no threshold
        self.thresholds = {s: int(thresholds[s.value]) for s in STAGE_ORDER if s.value in thresholds}

    def temp_in_range(self, temperature: int) -> bool:
        lo, hi = self.optimal_temp
        return lo <= temperature <= hi

    def is_eligible(self, state: PlantState) -> bool:
        return (
            state.health > self.min_health
            and state.water_level > self.min_water
            and state.nutrient_level > self.min_nutrient
        )

    def disease_factor(self, state: PlantState) -> float:
        total = len(state.leaves)
        if total == 0:
            return 1.0
        return 1.0 - self.disease_weight * len(state.diseased_leaves()) / total

    def compute(self, state: PlantState) -> int:
        """Growth points the plant would gain today."""
        if not self.is_eligible(state):
            return 0
        base = state.water_level // self.water_divisor + state.nutrient_level // self.nutrient_divisor
        amount = float(base)
        amount *= self.weather_multipliers[state.weather]
        if self.temp_in_range(state.temperature):
            amount *= self.temp_optimal_multiplier
        else:
            amount *= self.temp_stress_multiplier
        if state.has_pest:
            amount *= self.pest_multiplier
        amount *= self.disease_factor(state)
        return int(amount)

    def advance_stage(self, state: PlantState) -> bool:
        threshold = self.thresholds.get(state.stage)
        if threshold is None or state.growth_points < threshold:
            return False
        previous = state.stage
        state.stage = previous.next()
        logger.debug("Day %d: %s -> %s at %d points", state.days_passed, previous.value, state.stage.value, state.growth_points)
        return True

    def step(self, state: PlantState) -> int:
        # an ineligible day neither grows nor promotes
        if not self.is_eligible(state):
            return 0
        gained = self.compute(state)
        state.growth_points += gained
        self.advance_stage(state)
        return gained
