# plantsim/disease.py
"""
DiseaseModel
------------
Leaf-level disease: onset from a lingering pest, daily progression,
removal of fully rotten leaves and contagion between leaves.

Draw order within a tick: onset target -> one progression increment per
diseased leaf (in leaf order) -> contagion roll -> contagion target.
"""

import logging
from typing import Optional

from plantsim.leaves import LeafManager
from plantsim.state import PEST_DISEASE, PCT_MAX, DiseaseType, Leaf, PlantState, clamp

logger = logging.getLogger(__name__)


class DiseaseModel:
    def __init__(self, cfg=None, leaves: Optional[LeafManager] = None):
        cfg = cfg or {}
        self.leaves = leaves or LeafManager()

        self.onset_progress = cfg.get('onset_progress', 10)
        self.contagion_progress = cfg.get('contagion_progress', 5)
        # daily increment drawn from [low, high)
        self.progress_low, self.progress_high = cfg.get('progress_range', (5, 15))
        self.severe_threshold = cfg.get('severe_threshold', 50)
        self.penalty_divisor = cfg.get('penalty_divisor', 20)
        self.contagion_chance = cfg.get('contagion_chance', 30)
        self.removal_damage = cfg.get('removal_damage', 10)

    # Onset ----------------------------------------------------------------
    def onset(self, state: PlantState, rng) -> Optional[Leaf]:
        """Infect a random healthy leaf with the current pest's disease."""
        disease = PEST_DISEASE.get(state.pest)
        healthy = state.healthy_leaves()
        if disease is None or not state.has_pest or not healthy:
            return None
        leaf = healthy[int(rng.integers(0, len(healthy)))]
        leaf.infect(disease, self.onset_progress)
        logger.debug("Day %d: leaf %d caught %s", state.days_passed, leaf.id, disease.value)
        return leaf

    # Progression ----------------------------------------------------------
    def progress(self, state: PlantState, rng) -> Optional[Leaf]:
        """Worsen every diseased leaf. Returns the leaf removed this tick, if any."""
        severe = False
        removed = None
        diseased = state.diseased_leaves()
        # contagion spreads this type even if its leaf rots away below
        source = diseased[0].disease_type if diseased else None
        for leaf in list(state.leaves):
            if not leaf.is_diseased:
                continue
            step = int(rng.integers(self.progress_low, self.progress_high))
            leaf.disease_progress = clamp(leaf.disease_progress + step)

            if leaf.disease_progress >= self.severe_threshold:
                state.damage(leaf.disease_progress // self.penalty_divisor)
                severe = True

            if leaf.disease_progress >= PCT_MAX:
                state.damage(self.removal_damage)
                self.leaves.remove(state, leaf)
                removed = leaf
                logger.debug("Day %d: leaf %d rotted away", state.days_passed, leaf.id)
                # one removal per pass
                break

        if severe and int(rng.integers(0, 100)) < self.contagion_chance:
            self.spread(state, rng, disease=source)
        return removed

    def spread(self, state: PlantState, rng, disease: Optional[DiseaseType] = None) -> Optional[Leaf]:
        """Pass `disease` (default: the first diseased leaf's) on to a random healthy leaf."""
        healthy = state.healthy_leaves()
        if disease is None:
            diseased = state.diseased_leaves()
            disease = diseased[0].disease_type if diseased else None
        if not healthy or disease is None:
            return None
        leaf = healthy[int(rng.integers(0, len(healthy)))]
        leaf.infect(disease, self.contagion_progress)
        logger.debug("Day %d: %s spread to leaf %d", state.days_passed, disease.value, leaf.id)
        return leaf

    def step(self, state: PlantState, rng, onset: bool = False) -> Optional[Leaf]:
        if onset:
            self.onset(state, rng)
        return self.progress(state, rng)

    # Player action --------------------------------------------------------
    def cut(self, state: PlantState, leaf_id: int) -> bool:
        """Remove a diseased leaf by id. Unknown or healthy leaves are left alone."""
        leaf = state.find_leaf(leaf_id)
        if leaf is None or not leaf.is_diseased:
            return False
        self.leaves.remove(state, leaf)
        return True
