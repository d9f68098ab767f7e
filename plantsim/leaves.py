# plantsim/leaves.py
"""
LeafManager
-----------
Leaf population tied to growth stage. A leaf sprouts whenever growth points
sit on a positive multiple of `spawn_interval` and the stage still has room.
Its position bucket comes from its index against thirds of the stage cap and
is never recomputed afterwards.
"""

import logging
from typing import Optional

from plantsim.state import STAGE_ORDER, Leaf, LeafPosition, PlantStage, PlantState

logger = logging.getLogger(__name__)

DEFAULT_CAPS = {
    'seed': 0,
    'sprout': 2,
    'young': 5,
    'mature': 8,
    'flowering': 12,
}


class LeafManager:
    def __init__(self, cfg=None):
        cfg = cfg or {}
        caps = cfg.get('caps', DEFAULT_CAPS)
        self.caps = {stage: int(caps[stage.value]) for stage in STAGE_ORDER}
        self.spawn_interval = cfg.get('spawn_interval', 15)

    def cap(self, stage: PlantStage) -> int:
        return self.caps[stage]

    def position_for(self, index: int, cap: int) -> LeafPosition:
        if index < cap / 3:
            return LeafPosition.BOTTOM
        if index < 2 * cap / 3:
            return LeafPosition.MIDDLE
        return LeafPosition.TOP

    def should_spawn(self, state: PlantState) -> bool:
        gp = state.growth_points
        return gp > 0 and gp % self.spawn_interval == 0 and len(state.leaves) < self.cap(state.stage)

    def maybe_spawn(self, state: PlantState) -> Optional[Leaf]:
        if not self.should_spawn(state):
            return None
        leaf = Leaf(
            id=state.next_leaf_id(),
            position=self.position_for(len(state.leaves), self.cap(state.stage)),
        )
        state.leaves.append(leaf)
        logger.debug("Day %d: leaf %d sprouted (%s)", state.days_passed, leaf.id, leaf.position.value)
        return leaf

    def remove(self, state: PlantState, leaf: Leaf):
        state.leaves = [other for other in state.leaves if other is not leaf]
