import math
import os

import pytest

import cafesim
from cafesim.config import DEFAULT_CONFIG_PATH, SimulationConfig, apply_overrides, load_cfg
from cafesim.errors import ConfigError


def test_baseline_yaml_loads():
    cfg = load_cfg()
    config = SimulationConfig.from_dict(cfg)
    assert config.duration == 60.0
    assert config.servers == 2
    assert config.mean_service_time == 3.0
    assert config.mean_interarrival_time == 4.0
    assert config.seed == 42


def test_load_cfg_from_path(tmp_path):
    path = tmp_path / "shop.yaml"
    path.write_text(
        "sim:\n  duration_minutes: 30\n  seed: 9\n"
        "service:\n  servers: 1\n  mean_service_minutes: 2.5\n"
        "arrivals:\n  mean_interarrival_minutes: .inf\n"
    )
    config = SimulationConfig.from_dict(load_cfg(str(path)))
    assert config.duration == 30.0
    assert config.seed == 9
    assert config.servers == 1
    assert config.mean_interarrival_time == math.inf


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_cfg(str(path))


def test_missing_sections_fall_back_to_defaults():
    assert SimulationConfig.from_dict({}) == SimulationConfig()


def test_apply_overrides_merges_without_mutating():
    base = {"service": {"servers": 2, "mean_service_minutes": 3.0}, "sim": {"seed": 1}}
    merged = apply_overrides(base, {"service": {"servers": 3}})
    assert merged["service"] == {"servers": 3, "mean_service_minutes": 3.0}
    assert base["service"]["servers"] == 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mean_service_time": 0.0},
        {"mean_service_time": -3.0},
        {"mean_interarrival_time": 0},
        {"mean_interarrival_time": float("nan")},
        {"mean_service_time": "fast"},
        {"servers": 0},
        {"servers": 2.0},
        {"seed": "42"},
        {"duration": -1.0},
        {"duration": math.inf},
    ],
)
def test_invalid_values_fail_at_construction(kwargs):
    with pytest.raises(ConfigError):
        SimulationConfig(**kwargs)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        SimulationConfig(servers=-1)


def test_with_seed_keeps_other_fields():
    config = SimulationConfig(servers=3, seed=1)
    other = config.with_seed(5)
    assert other.seed == 5
    assert other.servers == 3
    assert config.seed == 1


def test_default_config_ships_inside_the_package():
    package_dir = os.path.dirname(os.path.abspath(cafesim.__file__))
    assert os.path.dirname(DEFAULT_CONFIG_PATH) == package_dir
    assert os.path.isfile(DEFAULT_CONFIG_PATH)


def test_default_config_found_from_any_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert SimulationConfig.from_dict(load_cfg()).servers == 2


def test_missing_config_file_is_config_error(tmp_path):
    with pytest.raises(ConfigError, match="cannot read"):
        load_cfg(str(tmp_path / "nope.yaml"))


def test_malformed_yaml_is_config_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("service: [servers: 2\n")
    with pytest.raises(ConfigError, match="not valid YAML"):
        load_cfg(str(path))
