# rl/gym_env.py
"""
Plant-care Environment

Wraps PlantGame as a gymnasium environment: one step = one player action
followed by one simulated day, driven through the same advance_day() /
wait_idle() path a UI would use.
"""

import gymnasium as gym
from gymnasium import spaces
import numpy as np
from typing import Optional, Dict, Any

from plantsim.game import PlantGame
from plantsim.state import PEST_CHOICES, STAGE_ORDER, WEATHER_ORDER, PlantState

# ============================================================================
# OBSERVATION SCHEMA - AUTHORITATIVE DEFINITION
# ============================================================================
# ALL code that decodes observations MUST use this schema.
# ============================================================================

OBS_KEYS = [
    'water',               # 0..1
    'nutrient',            # 0..1
    'health',              # 0..1
    'temperature',         # Celsius, unscaled
    'growth_points',
    'stage',               # index into PlantStage
    'weather',             # index into Weather
    'has_pest',            # 0/1
    'pest',                # 0 none, 1 aphids, 2 mites, 3 fungus
    'infestation_days',
    'leaf_count',
    'diseased_fraction',   # 0..1
    'max_disease',         # worst leaf progress, 0..1
    'money',
]

# ============================================================================
# ACTION SCHEMA
# ============================================================================

ACTIONS = (
    'wait',
    'water',
    'nutrients',
    'heat',
    'cool',
    'treat_pests',
    'cut_leaf',
)

# cost key in the ledger for each paid action
ACTION_COSTS = {
    'water': 'water',
    'nutrients': 'nutrients',
    'heat': 'temperature',
    'cool': 'temperature',
    'treat_pests': 'treat_pests',
    'cut_leaf': 'cut_leaf',
}


def encode_state(state: PlantState) -> np.ndarray:
    diseased = state.diseased_leaves()
    n_leaves = len(state.leaves)
    pest_index = PEST_CHOICES.index(state.pest) + 1 if state.has_pest else 0
    values = {
        'water': state.water_level / 100.0,
        'nutrient': state.nutrient_level / 100.0,
        'health': state.health / 100.0,
        'temperature': float(state.temperature),
        'growth_points': float(state.growth_points),
        'stage': float(STAGE_ORDER.index(state.stage)),
        'weather': float(WEATHER_ORDER.index(state.weather)),
        'has_pest': float(state.has_pest),
        'pest': float(pest_index),
        'infestation_days': float(state.infestation_days),
        'leaf_count': float(n_leaves),
        'diseased_fraction': len(diseased) / n_leaves if n_leaves else 0.0,
        'max_disease': max((leaf.disease_progress for leaf in diseased), default=0) / 100.0,
        'money': float(state.money),
    }
    return np.array([values[k] for k in OBS_KEYS], dtype=np.float32)


def decode_obs(obs) -> Dict[str, float]:
    return {key: float(obs[i]) for i, key in enumerate(OBS_KEYS)}


def action_mask(game: PlantGame) -> np.ndarray:
    """
    Which actions a player could sensibly press right now.

    Mirrors the enablement rules of the game screen (affordable, applicable,
    not gated). The core itself never refuses for lack of money.
    """
    state = game.state
    mask = np.zeros(len(ACTIONS), dtype=np.int8)
    if state.is_processing or state.is_game_over:
        return mask

    def affordable(action):
        return game.ledger.can_afford(state, ACTION_COSTS[action])

    mask[ACTIONS.index('wait')] = 1
    mask[ACTIONS.index('water')] = affordable('water') and state.water_level < 100
    mask[ACTIONS.index('nutrients')] = affordable('nutrients') and state.nutrient_level < 100
    mask[ACTIONS.index('heat')] = affordable('heat')
    mask[ACTIONS.index('cool')] = affordable('cool')
    mask[ACTIONS.index('treat_pests')] = affordable('treat_pests') and state.has_pest
    mask[ACTIONS.index('cut_leaf')] = affordable('cut_leaf') and bool(state.diseased_leaves())
    return mask


class PlantCareEnv(gym.Env):
    """
    Discrete plant-care environment.

    Reward per day: growth points gained, minus half the health lost,
    minus `death_penalty` when the plant dies.
    """

    metadata = {"render_modes": ["human"]}

    OBS_KEYS = OBS_KEYS
    ACTIONS = ACTIONS

    def __init__(self, cfg: Optional[dict] = None, render_mode: Optional[str] = None):
        super().__init__()
        self.cfg = cfg or {}
        self.render_mode = render_mode

        env_cfg = self.cfg.get('env', {}) if isinstance(self.cfg.get('env'), dict) else {}
        self.max_days = env_cfg.get('max_days', 60)
        self.death_penalty = env_cfg.get('death_penalty', 10.0)

        self.action_space = spaces.Discrete(len(ACTIONS))
        low = np.zeros(len(OBS_KEYS), dtype=np.float32)
        high = np.full(len(OBS_KEYS), np.inf, dtype=np.float32)
        low[OBS_KEYS.index('temperature')] = -np.inf
        self.observation_space = spaces.Box(low=low, high=high, dtype=np.float32)

        self.game = PlantGame(self.cfg, rng=self.np_random)

    def _get_obs(self) -> np.ndarray:
        return encode_state(self.game.state)

    def _get_info(self, growth: int = 0) -> Dict[str, Any]:
        return {
            'state': self.game.get_state(),
            'growth': growth,
            'action_mask': action_mask(self.game),
            'day': self.game.state.days_passed,
        }

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        # the game draws from the env's seeded generator
        self.game = PlantGame(self.cfg, rng=self.np_random)
        return self._get_obs(), self._get_info()

    def _apply_action(self, name: str):
        game = self.game
        if name == 'water':
            game.water_plant()
        elif name == 'nutrients':
            game.add_nutrients()
        elif name == 'heat':
            game.adjust_temperature(True)
        elif name == 'cool':
            game.adjust_temperature(False)
        elif name == 'treat_pests':
            game.treat_pests()
        elif name == 'cut_leaf':
            diseased = game.state.diseased_leaves()
            if diseased:
                worst = max(diseased, key=lambda leaf: leaf.disease_progress)
                game.cut_diseased_leaf(worst.id)

    def step(self, action):
        index = int(action)
        if not 0 <= index < len(ACTIONS):
            raise ValueError(f"Invalid action {action!r}; expected 0..{len(ACTIONS) - 1}")

        self._apply_action(ACTIONS[index])
        health_before = self.game.state.health
        day_before = self.game.state.days_passed

        self.game.advance_day()
        self.game.wait_idle()

        state = self.game.state
        report = self.game.last_report if state.days_passed > day_before else {}
        growth = int(report.get('growth', 0))
        health_lost = max(0, health_before - state.health)

        reward = float(growth) - 0.5 * health_lost
        terminated = state.is_game_over
        if terminated:
            reward -= self.death_penalty
        truncated = (not terminated) and state.days_passed >= self.max_days

        if self.render_mode == 'human':
            self.render()
        return self._get_obs(), reward, terminated, truncated, self._get_info(growth)

    def render(self):
        s = self.game.state
        pest = s.pest.value if s.has_pest else '-'
        sick = len(s.diseased_leaves())
        print(f"Day {s.days_passed:3d} | {s.stage.value:9s} | {s.weather.value:7s} | "
              f"W={s.water_level:3d} N={s.nutrient_level:3d} H={s.health:3d} T={s.temperature:3d}C | "
              f"GP={s.growth_points:4d} ${s.money:4d} | pest={pest} leaves={len(s.leaves)} sick={sick}")
