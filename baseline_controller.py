#!/usr/bin/env python3
"""
Baseline Controller for the plant-care simulation
A simple rule-based gardener to sanity-check the game balance.

A careful gardener following these rules should keep most plants alive for a
whole season. If it can't, the tuning (or the engine) is off.
"""

import argparse
import json
import sys
from pathlib import Path

import numpy as np

# Add project root to path
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from plantsim.economy import DEFAULT_COSTS
from plantsim.state import STAGE_ORDER
from rl.gym_env import ACTIONS, PlantCareEnv, decode_obs


class BaselineController:
    """
    Simple rule-based controller using plant-care common sense.

    Rules, first match wins:
    1. Treat pests as soon as they show up
    2. Cut a leaf once its disease passes `cut_threshold`
    3. Water when water < `water_below`
    4. Feed when nutrients < `feed_below`
    5. Steer temperature back into 18-28°C
    6. Otherwise wait
    Every paid rule is skipped when the wallet can't cover it.
    """

    def __init__(self, water_below=0.45, feed_below=0.40, cut_threshold=0.4, costs=None):
        self.water_below = water_below
        self.feed_below = feed_below
        self.cut_threshold = cut_threshold
        self.costs = dict(costs or DEFAULT_COSTS)
        self.name = "Baseline"

    def predict(self, obs, deterministic=True):
        """
        Predict an action index from an observation (see rl.gym_env.OBS_KEYS).

        Returns (action, None) to match the usual policy interface.
        """
        o = decode_obs(obs)
        money = o['money']

        def pick(name):
            return ACTIONS.index(name), None

        if o['has_pest'] > 0.5 and money >= self.costs['treat_pests']:
            return pick('treat_pests')
        if o['max_disease'] >= self.cut_threshold and money >= self.costs['cut_leaf']:
            return pick('cut_leaf')
        if o['water'] < self.water_below and money >= self.costs['water']:
            return pick('water')
        if o['nutrient'] < self.feed_below and money >= self.costs['nutrients']:
            return pick('nutrients')
        if o['temperature'] < 18 and money >= self.costs['temperature']:
            return pick('heat')
        if o['temperature'] > 28 and money >= self.costs['temperature']:
            return pick('cool')
        return pick('wait')


def run_baseline_evaluation(n_episodes=10, seed=42, cfg=None, verbose=True):
    """Run the baseline controller over seeded seasons and collect statistics"""
    env = PlantCareEnv(cfg)
    controller = BaselineController(costs=env.game.ledger.costs)

    if verbose:
        print("=" * 70)
        print("BASELINE CONTROLLER EVALUATION")
        print("=" * 70)
        print(f"Controller: {controller.name}")
        print(f"Episodes: {n_episodes}")
        print(f"Max days per episode: {env.max_days}")
        print("-" * 70)

    results = {
        'rewards': [],
        'lengths': [],
        'final_stage': [],
        'deaths': [],
        'growth': [],
        'money': [],
    }

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode)
        done = False
        episode_reward = 0.0
        steps = 0

        while not done:
            action, _ = controller.predict(obs, deterministic=True)
            obs, reward, terminated, truncated, info = env.step(action)
            episode_reward += reward
            steps += 1
            done = terminated or truncated

        final = info['state']
        results['rewards'].append(episode_reward)
        results['lengths'].append(steps)
        results['final_stage'].append(final['stage'])
        results['deaths'].append(1 if final['is_game_over'] else 0)
        results['growth'].append(final['growth_points'])
        results['money'].append(final['money'])

        if verbose:
            status = 'died' if final['is_game_over'] else 'survived'
            print(f"Episode {episode + 1}/{n_episodes}: days={steps} reward={episode_reward:.1f} "
                  f"stage={final['stage']} growth={final['growth_points']} money={final['money']} ({status})")

    if verbose:
        stage_counts = {}
        for stage in results['final_stage']:
            stage_counts[stage] = stage_counts.get(stage, 0) + 1

        print("\n" + "=" * 70)
        print("SUMMARY STATISTICS")
        print("=" * 70)
        print(f"Mean Episode Reward:  {np.mean(results['rewards']):.2f} ± {np.std(results['rewards']):.2f}")
        print(f"Mean Survival Time:   {np.mean(results['lengths']):.1f} / {env.max_days} days")
        print(f"Mean Growth Points:   {np.mean(results['growth']):.1f}")
        print(f"Mean Final Money:     {np.mean(results['money']):.1f}")
        print(f"Death Rate:           {np.mean(results['deaths']) * 100:.1f}%")
        print("\nFinal stages:")
        for stage in STAGE_ORDER:
            if stage.value in stage_counts:
                count = stage_counts[stage.value]
                print(f"  {stage.value}: {count} ({count / n_episodes * 100:.1f}%)")
        print("=" * 70 + "\n")

    return results


def main():
    parser = argparse.ArgumentParser(description='Run baseline controller evaluation')
    parser.add_argument('--episodes', type=int, default=10,
                        help='Number of episodes to run')
    parser.add_argument('--seed', type=int, default=42,
                        help='Seed of the first episode')
    parser.add_argument('--quick', action='store_true',
                        help='Quick test with 3 episodes')
    parser.add_argument('--out', type=str, default=None,
                        help='Optional JSON file for the raw results')

    args = parser.parse_args()
    n_episodes = 3 if args.quick else args.episodes

    results = run_baseline_evaluation(n_episodes=n_episodes, seed=args.seed)

    if args.out:
        output_path = Path(args.out)
        with open(output_path, 'w') as f:
            json.dump(results, f, indent=2)
        print(f"Results saved to {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
