# config.py
"""
Config loader for the plant-care simulation.

Provides a single entry `load_config(path=None)` that reads YAML config from
`config/defaults.yaml` by default and returns a nested dict. Also exposes
`get_default_config()` for quick access and `make_rng(cfg)` to build the
random source every simulation draw goes through.
"""

import os

import numpy as np
import yaml

DEFAULT_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), 'config', 'defaults.yaml'))


def load_config(path=None):
    """Load YAML config and return a dict."""
    p = path or DEFAULT_PATH
    if not os.path.exists(p):
        raise FileNotFoundError(f"Config file not found: {p}")
    with open(p, 'r') as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config root must be a mapping: {p}")
    return cfg


def get_default_config():
    return load_config(DEFAULT_PATH)


def make_rng(cfg=None, seed=None):
    """numpy Generator seeded from `seed`, else cfg['seed'], else OS entropy."""
    if seed is None and cfg:
        seed = cfg.get('seed')
    return np.random.default_rng(seed)


if __name__ == '__main__':
    print(load_config())
