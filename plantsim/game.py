# plantsim/game.py
"""
PlantGame
---------
Orchestrates one potted plant: the player action API, the daily tick
pipeline and the processing / game-over gates.

Daily tick order (each step sees everything before it):
    weather -> pests -> disease -> water/nutrient decay -> temperature stress
    -> growth & stage -> income -> health regen -> leaf spawn
    -> game-over check -> day counter

`advance_day()` hands a copy of the state to a worker thread and returns at
once. The finished state comes back through `post`, a foreground scheduler
(by default an internal queue drained by `process_events()`), and replaces
the live state in one piece; only then is `is_processing` cleared. Actions
issued meanwhile are dropped, not queued.
"""

import copy
import logging
import queue
import threading
from enum import Enum
from typing import Callable, Dict, List, Optional

from config import make_rng

from plantsim.disease import DiseaseModel
from plantsim.economy import Ledger
from plantsim.growth import GrowthModel
from plantsim.leaves import LeafManager
from plantsim.pests import PestModel
from plantsim.state import PCT_MAX, PlantState, clamp, default_state
from plantsim.weather import WeatherModel

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    IDLE = 'idle'
    PROCESSING = 'processing'
    ENDED = 'ended'


class PlantGame:
    def __init__(self, cfg=None, rng=None, post: Optional[Callable] = None):
        cfg = cfg or {}
        self.cfg = cfg
        self.rng = rng if rng is not None else make_rng(cfg)

        # Components
        self.weather = WeatherModel(cfg.get('weather'))
        self.pests = PestModel(cfg.get('pests'))
        self.leaves = LeafManager(cfg.get('leaves'))
        self.disease = DiseaseModel(cfg.get('disease'), leaves=self.leaves)
        self.growth = GrowthModel(cfg.get('growth'))
        self.ledger = Ledger(cfg.get('economy'))

        # Plant care parameters
        plant_cfg = cfg.get('plant', {})
        self.water_gain = plant_cfg.get('water_gain', 15)
        self.nutrient_gain = plant_cfg.get('nutrient_gain', 25)
        self.temp_step = plant_cfg.get('temp_step', 2)
        self.nutrient_decay = plant_cfg.get('nutrient_decay', 8)
        self.temp_stress_per_degree = plant_cfg.get('temp_stress_per_degree', 2)
        self.max_temp_stress = plant_cfg.get('max_temp_stress', 10)
        self.regen_amount = plant_cfg.get('regen_amount', 5)
        self.regen_min_water = plant_cfg.get('regen_min_water', 40)
        self.regen_min_nutrient = plant_cfg.get('regen_min_nutrient', 30)
        self.cut_growth_penalty = plant_cfg.get('cut_growth_penalty', 2)

        self.state: PlantState = default_state()
        self.last_report: Dict = {}

        # Foreground handoff
        self._events: queue.Queue = queue.Queue()
        self._post = post or self._events.put
        self._worker: Optional[threading.Thread] = None
        self._subscribers: List[Callable[[Dict], None]] = []

    # Observation ----------------------------------------------------------
    @property
    def phase(self) -> GamePhase:
        if self.state.is_processing:
            return GamePhase.PROCESSING
        if self.state.is_game_over:
            return GamePhase.ENDED
        return GamePhase.IDLE

    def get_state(self) -> Dict:
        return self.state.get_state()

    def subscribe(self, callback: Callable[[Dict], None]) -> Callable[[], None]:
        """Call `callback(snapshot)` after every accepted change. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self):
        snapshot = self.get_state()
        for callback in list(self._subscribers):
            callback(snapshot)

    def _accepting(self, action: str) -> bool:
        if self.state.is_processing or self.state.is_game_over:
            logger.debug("Ignoring %s while %s", action, self.phase.value)
            return False
        return True

    # Player actions -------------------------------------------------------
    def water_plant(self):
        if not self._accepting('water_plant'):
            return
        if self.state.water_level < PCT_MAX:
            self.state.water_level = clamp(self.state.water_level + self.water_gain)
            self.ledger.charge(self.state, 'water')
            self._notify()

    def add_nutrients(self):
        if not self._accepting('add_nutrients'):
            return
        if self.state.nutrient_level < PCT_MAX:
            self.state.nutrient_level = clamp(self.state.nutrient_level + self.nutrient_gain)
            self.ledger.charge(self.state, 'nutrients')
            self._notify()

    def adjust_temperature(self, increase: bool):
        if not self._accepting('adjust_temperature'):
            return
        self.state.temperature += self.temp_step if increase else -self.temp_step
        self.ledger.charge(self.state, 'temperature')
        self._notify()

    def treat_pests(self):
        if not self._accepting('treat_pests'):
            return
        if self.pests.treat(self.state):
            self.ledger.charge(self.state, 'treat_pests')
            self._notify()

    def cut_diseased_leaf(self, leaf_id: int):
        if not self._accepting('cut_diseased_leaf'):
            return
        if self.disease.cut(self.state, leaf_id):
            self.state.growth_points = max(0, self.state.growth_points - self.cut_growth_penalty)
            self.ledger.charge(self.state, 'cut_leaf')
            self._notify()

    def reset_game(self):
        if self.state.is_processing:
            logger.debug("Ignoring reset_game while processing")
            return
        self.state = default_state()
        self.last_report = {}
        self._notify()

    # Daily tick -----------------------------------------------------------
    def advance_day(self):
        if not self._accepting('advance_day'):
            return
        self.state.is_processing = True
        working = copy.deepcopy(self.state)

        def worker():
            report, error = None, None
            try:
                report = self.run_day(working)
            except Exception as exc:
                error = exc
            def deliver():
                self._deliver(working, report, error)

            try:
                self._post(deliver)
            except Exception:
                # the day must still land; hand it to process_events() instead
                logger.exception("Foreground scheduler rejected day %d; queueing it locally", working.days_passed)
                self._events.put(deliver)

        self._worker = threading.Thread(target=worker, name='plant-day', daemon=True)
        self._worker.start()

    def _deliver(self, working: PlantState, report: Optional[Dict], error: Optional[BaseException]):
        if error is not None:
            # keep the pre-tick state, but never leave the gate shut
            self.state.is_processing = False
            raise error
        working.is_processing = False
        self.state = working
        self.last_report = report
        self._notify()

    def process_events(self) -> int:
        """Run completions posted by the worker. Returns how many ran."""
        n = 0
        while True:
            try:
                callback = self._events.get_nowait()
            except queue.Empty:
                return n
            callback()
            n += 1

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until the in-flight day (if any) has been delivered."""
        worker = self._worker
        if worker is not None:
            worker.join(timeout)
            if worker.is_alive():
                return False
        self.process_events()
        return not self.state.is_processing

    def run_day(self, state: PlantState) -> Dict:
        """Advance `state` by one day in place and return what happened."""
        day = state.days_passed
        health_before = state.health
        rng = self.rng

        self.weather.step(state, rng)
        onset = self.pests.step(state, rng)
        removed = self.disease.step(state, rng, onset=onset)
        self._apply_decay(state)
        self._apply_temperature_stress(state)
        gained = self.growth.step(state)
        earned = self.ledger.pay_income(state)
        self._regenerate(state)
        sprouted = self.leaves.maybe_spawn(state)

        if state.health <= 0:
            state.health = 0
            state.is_game_over = True
            logger.info("Day %d: the plant died (%s weather, pest=%s)", day, state.weather.value, state.pest.value)

        state.days_passed += 1

        return {
            'day': day,
            'weather': state.weather.value,
            'pest': state.pest.value,
            'growth': gained,
            'income': earned,
            'health_change': state.health - health_before,
            'leaf_removed': removed.id if removed is not None else None,
            'leaf_sprouted': sprouted.id if sprouted is not None else None,
            'game_over': state.is_game_over,
        }

    def _apply_decay(self, state: PlantState):
        state.water_level = clamp(state.water_level - self.weather.daily_water_loss(state.weather))
        state.nutrient_level = clamp(state.nutrient_level - self.nutrient_decay)

    def _apply_temperature_stress(self, state: PlantState):
        lo, hi = self.growth.optimal_temp
        if state.temperature < lo:
            stress = (lo - state.temperature) * self.temp_stress_per_degree
        elif state.temperature > hi:
            stress = (state.temperature - hi) * self.temp_stress_per_degree
        else:
            return
        state.damage(min(stress, self.max_temp_stress))

    def _regenerate(self, state: PlantState):
        if (
            state.water_level > self.regen_min_water
            and state.nutrient_level > self.regen_min_nutrient
            and self.growth.temp_in_range(state.temperature)
            and not state.has_pest
        ):
            state.health = clamp(state.health + self.regen_amount)
