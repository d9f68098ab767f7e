#!/usr/bin/env python3
"""
main.py - Orchestrator for the plant-care simulation

Usage examples:
    python main.py sim_run --days 30
    python main.py sim_run --days 60 --policy idle --seed 7
    python main.py evaluate --episodes 20

This script expects to be run from the project root.
"""
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

# Ensure project root is on PYTHONPATH
ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from baseline_controller import BaselineController, run_baseline_evaluation
from config import load_config
from rl.gym_env import ACTIONS, PlantCareEnv


def season_length(args, cfg):
    """Days to play: --days when given (0 included), else env.max_days."""
    if args.days is not None:
        return args.days
    return cfg.get('env', {}).get('max_days', 60)


def sim_run(args):
    cfg = load_config(args.config)
    days = season_length(args, cfg)
    seed = args.seed if args.seed is not None else cfg.get('seed')

    # Setup logging
    log_dir = ROOT / "logs"
    log_dir.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"sim_run_{timestamp}.log"

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s | %(levelname)s | %(message)s',
        handlers=[
            logging.FileHandler(log_file, mode='w'),
            logging.StreamHandler()  # Also print to console
        ]
    )
    logger = logging.getLogger(__name__)

    logger.info("=" * 80)
    logger.info("SIMULATION RUN STARTED")
    logger.info(f"Days: {days}")
    logger.info(f"Seed: {seed}")
    logger.info(f"Policy: {args.policy}")
    logger.info(f"Log file: {log_file}")
    logger.info("=" * 80)

    env_cfg = dict(cfg)
    env_cfg['env'] = dict(cfg.get('env', {}), max_days=days)
    env = PlantCareEnv(env_cfg)
    controller = BaselineController(costs=env.game.ledger.costs) if args.policy == 'baseline' else None

    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(days):
        action = controller.predict(obs)[0] if controller else ACTIONS.index('wait')
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += reward

        s = info['state']
        logger.info(
            f"Day {s['days_passed']:3d} | action={ACTIONS[action]:11s} | {s['weather']:7s} | "
            f"stage={s['stage']:9s} W={s['water_level']:3d} N={s['nutrient_level']:3d} "
            f"H={s['health']:3d} T={s['temperature']:3d} GP={s['growth_points']:4d} "
            f"${s['money']:4d} pest={s['pest']} leaves={len(s['leaves'])} reward={reward:+.1f}"
        )
        if terminated or truncated:
            break

    final = info['state']
    logger.info("=" * 80)
    if final['is_game_over']:
        logger.info(f"Plant died on day {final['days_passed']}")
    logger.info(f"Final stage: {final['stage']}  growth={final['growth_points']}  "
                f"money={final['money']}  total_reward={total_reward:.1f}")
    logger.info("=" * 80)


def evaluate(args):
    cfg = load_config(args.config)
    run_baseline_evaluation(n_episodes=args.episodes, seed=args.seed, cfg=cfg)


def parse_args():
    p = argparse.ArgumentParser(description="Plant-care simulation - main orchestrator")
    sub = p.add_subparsers(dest="cmd")

    s = sub.add_parser("sim_run", help="Play one season and log every day")
    s.add_argument("--days", type=int, help="days to simulate (default: env.max_days)")
    s.add_argument("--seed", type=int, default=None, help="random seed (default: config seed)")
    s.add_argument("--policy", choices=["baseline", "idle"], default="baseline", help="who tends the plant")
    s.add_argument("--config", type=str, default=None, help="YAML config (default: config/defaults.yaml)")
    s.add_argument("--verbose", action='store_true', help="Also log engine events (DEBUG)")

    e = sub.add_parser("evaluate", help="Evaluate the baseline controller over seeded seasons")
    e.add_argument("--episodes", type=int, default=10, help="number of seasons")
    e.add_argument("--seed", type=int, default=42, help="seed of the first season")
    e.add_argument("--config", type=str, default=None, help="YAML config (default: config/defaults.yaml)")

    return p.parse_args()


def main():
    args = parse_args()
    if not args.cmd:
        print("No command given. Use -h to see options.")
        return
    if args.cmd == "sim_run":
        sim_run(args)
    elif args.cmd == "evaluate":
        evaluate(args)
    else:
        print("Unknown command:", args.cmd)


if __name__ == "__main__":
    main()
