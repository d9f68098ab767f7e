# plantsim/state.py
"""
PlantState
----------
Mutable aggregate for one potted plant: resource levels, weather, pests,
leaves and the in-game wallet. Exactly one PlantGame owns an instance.

Percentages (water, nutrients, health, disease progress) live in [0, 100].
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class PlantStage(Enum):
    SEED = 'seed'
    SPROUT = 'sprout'
    YOUNG = 'young'
    MATURE = 'mature'
    FLOWERING = 'flowering'

    @property
    def index(self) -> int:
        return STAGE_ORDER.index(self)

    def next(self) -> 'PlantStage':
        """Following stage; Flowering is terminal."""
        i = self.index
        return STAGE_ORDER[min(i + 1, len(STAGE_ORDER) - 1)]


class Weather(Enum):
    SUNNY = 'sunny'
    CLOUDY = 'cloudy'
    RAINY = 'rainy'
    STORMY = 'stormy'
    DROUGHT = 'drought'


class PestType(Enum):
    NONE = 'none'
    APHIDS = 'aphids'
    MITES = 'mites'
    FUNGUS = 'fungus'


class DiseaseType(Enum):
    NONE = 'none'
    LEAF_SPOT = 'leaf_spot'
    POWDERY_MILDEW = 'powdery_mildew'
    ROOT_ROT = 'root_rot'


class LeafPosition(Enum):
    BOTTOM = 'bottom'
    MIDDLE = 'middle'
    TOP = 'top'


STAGE_ORDER = list(PlantStage)
WEATHER_ORDER = list(Weather)
# pests that can actually land on the plant, in draw order
PEST_CHOICES = (PestType.APHIDS, PestType.MITES, PestType.FUNGUS)

PEST_DISEASE = {
    PestType.APHIDS: DiseaseType.LEAF_SPOT,
    PestType.MITES: DiseaseType.POWDERY_MILDEW,
    PestType.FUNGUS: DiseaseType.ROOT_ROT,
}

PCT_MIN = 0
PCT_MAX = 100


def clamp(x, lo=PCT_MIN, hi=PCT_MAX):
    return max(lo, min(hi, x))


@dataclass
class Leaf:
    id: int
    position: LeafPosition
    disease_type: DiseaseType = DiseaseType.NONE
    disease_progress: int = 0

    @property
    def is_diseased(self) -> bool:
        return self.disease_type is not DiseaseType.NONE

    def infect(self, disease: DiseaseType, progress: int):
        self.disease_type = disease
        self.disease_progress = clamp(progress)


@dataclass
class PlantState:
    water_level: int = 50
    nutrient_level: int = 50
    temperature: int = 25  # Celsius
    stage: PlantStage = PlantStage.SEED
    growth_points: int = 0
    days_passed: int = 0
    health: int = 100
    weather: Weather = Weather.SUNNY
    pest: PestType = PestType.NONE
    has_pest: bool = False
    infestation_days: int = 0
    money: int = 100
    is_game_over: bool = False
    is_processing: bool = False
    leaves: List[Leaf] = field(default_factory=list)

    # Leaves ---------------------------------------------------------------
    def diseased_leaves(self) -> List[Leaf]:
        return [leaf for leaf in self.leaves if leaf.is_diseased]

    def healthy_leaves(self) -> List[Leaf]:
        return [leaf for leaf in self.leaves if not leaf.is_diseased]

    def find_leaf(self, leaf_id: int) -> Optional[Leaf]:
        for leaf in self.leaves:
            if leaf.id == leaf_id:
                return leaf
        return None

    def next_leaf_id(self) -> int:
        return max((leaf.id for leaf in self.leaves), default=0) + 1

    # Mutators -------------------------------------------------------------
    def damage(self, amount: int):
        self.health = clamp(self.health - amount)

    def spend(self, amount: int):
        # affordability is a presentation concern; the wallet only floors at zero
        self.money = max(0, self.money - amount)

    def clear_pest(self):
        self.has_pest = False
        self.pest = PestType.NONE
        self.infestation_days = 0

    def get_state(self) -> Dict:
        """Plain-dict snapshot with enum members flattened to their values."""
        snap = asdict(self)
        for key in ('stage', 'weather', 'pest'):
            snap[key] = snap[key].value
        snap['leaves'] = [
            {
                'id': leaf.id,
                'position': leaf.position.value,
                'is_diseased': leaf.is_diseased,
                'disease_type': leaf.disease_type.value,
                'disease_progress': leaf.disease_progress,
            }
            for leaf in self.leaves
        ]
        return snap


def default_state() -> PlantState:
    """Fresh seed: the state a new game and every reset start from."""
    return PlantState()
