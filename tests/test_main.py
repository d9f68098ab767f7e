# tests/test_main.py
import argparse

import pytest

from main import season_length


@pytest.mark.parametrize("days, expected", [(None, 45), (0, 0), (7, 7)])
def test_season_length(days, expected):
    args = argparse.Namespace(days=days)
    assert season_length(args, {'env': {'max_days': 45}}) == expected


def test_season_length_without_env_section():
    assert season_length(argparse.Namespace(days=None), {}) == 60
