# plantsim/pests.py
"""
PestModel
---------
Infestation onset, daily damage and escalation into leaf disease.

Per tick, in draw order:
  1. no pest: onset roll in [0, 100); below `onset_chance` a pest lands,
     its type drawn uniformly from aphids / mites / fungus
  2. pest present (including one that just landed): health and nutrient
     damage, infestation_days += 1
  3. infestation_days >= `escalation_days`: escalation roll; below
     `escalation_chance` a healthy leaf should fall ill (handled by the
     disease model)
"""

import logging

from plantsim.state import PEST_CHOICES, PestType, PlantState, clamp

logger = logging.getLogger(__name__)

DEFAULT_DAMAGE = {
    'aphids': 5,
    'mites': 8,
    'fungus': 12,
}


class PestModel:
    def __init__(self, cfg=None):
        cfg = cfg or {}
        self.onset_chance = cfg.get('onset_chance', 15)
        damage = cfg.get('damage', DEFAULT_DAMAGE)
        self.damage = {pest: int(damage[pest.value]) for pest in PEST_CHOICES}
        self.escalation_days = cfg.get('escalation_days', 3)
        self.escalation_chance = cfg.get('escalation_chance', 40)
        self.treatment_damage = cfg.get('treatment_damage', 5)  # pesticide side effect

    def step(self, state: PlantState, rng) -> bool:
        """Advance the infestation by a day. Returns True when disease onset triggers."""
        if not state.has_pest:
            if int(rng.integers(0, 100)) < self.onset_chance:
                self.infest(state, PEST_CHOICES[int(rng.integers(0, len(PEST_CHOICES)))])

        if not state.has_pest:
            return False

        self.apply_damage(state)
        state.infestation_days += 1

        if state.infestation_days >= self.escalation_days:
            if int(rng.integers(0, 100)) < self.escalation_chance:
                logger.debug("Day %d: %s infestation escalates to disease", state.days_passed, state.pest.value)
                return True
        return False

    def infest(self, state: PlantState, pest: PestType):
        state.has_pest = True
        state.pest = pest
        state.infestation_days = 0
        logger.debug("Day %d: %s infestation", state.days_passed, pest.value)

    def apply_damage(self, state: PlantState):
        dmg = self.damage.get(state.pest, 0)
        state.damage(dmg)
        state.nutrient_level = clamp(state.nutrient_level - dmg // 2)

    def treat(self, state: PlantState) -> bool:
        """Clear an active infestation. The caller charges for it."""
        if not state.has_pest:
            return False
        state.clear_pest()
        state.damage(self.treatment_damage)
        return True
