# tests/test_config.py
import pytest

from config import DEFAULT_PATH, get_default_config, load_config, make_rng
from plantsim.game import PlantGame
from plantsim.growth import GrowthModel
from plantsim.leaves import LeafManager
from plantsim.pests import PestModel
from plantsim.weather import WeatherModel


def test_defaults_file_matches_builtin_defaults():
    cfg = get_default_config()
    assert dict(WeatherModel(cfg['weather']).cumulative) == dict(WeatherModel().cumulative)
    assert dict(WeatherModel(cfg['weather']).water_loss) == dict(WeatherModel().water_loss)
    assert PestModel(cfg['pests']).damage == PestModel().damage
    assert LeafManager(cfg['leaves']).caps == LeafManager().caps
    assert GrowthModel(cfg['growth']).weather_multipliers == GrowthModel().weather_multipliers
    assert GrowthModel(cfg['growth']).optimal_temp == (18, 28)
    assert cfg['env']['max_days'] == 60


def test_default_config_builds_a_game():
    cfg = load_config(DEFAULT_PATH)
    game = PlantGame(cfg)
    game.advance_day()
    assert game.wait_idle(timeout=5)
    assert game.state.days_passed == 1


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / 'nope.yaml'))


def test_non_mapping_root(tmp_path):
    path = tmp_path / 'list.yaml'
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_bad_weather_row_is_rejected(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text(
        "weather:\n"
        "  transitions:\n"
        "    sunny: [60, 20, 15, 3, 3]\n"
        "    cloudy: [25, 40, 25, 7, 3]\n"
        "    rainy: [15, 30, 40, 10, 5]\n"
        "    stormy: [5, 20, 30, 40, 5]\n"
        "    drought: [50, 25, 5, 0, 20]\n"
    )
    with pytest.raises(ValueError):
        PlantGame(load_config(str(path)))


def test_make_rng_is_reproducible():
    a = make_rng({'seed': 9})
    b = make_rng(seed=9)
    assert [int(a.integers(0, 100)) for _ in range(10)] == [int(b.integers(0, 100)) for _ in range(10)]
