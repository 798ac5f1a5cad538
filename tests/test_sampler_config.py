"""
Tests for SamplerConfig parsing, config file loading and make_sampler().
"""
from collections import Counter
import json
import logging

import pytest

from grabbag import EmptyItemSetError
from grabbag.constants import SAMPLER_CONFIG_ENV_VAR
from grabbag.samplers import (
    SamplerConfig,
    UniformBagSampler,
    WeightedBagSampler,
    load_sampler_config,
    make_sampler,
)
from grabbag.samplers.factory import find_config_file


LOOT_TABLE = {
    "type": "weighted",
    "weights": {"copper_coin": 6.0, "health_potion": 3.0, "iron_sword": 1.0},
    "seed": 42,
}


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv(SAMPLER_CONFIG_ENV_VAR, raising=False)


def write_config(path, data):
    path.write_text(json.dumps(data))
    return path


def test_from_dict_defaults():
    config = SamplerConfig.from_dict({"items": ["A", "B"]})
    assert config.type == "weighted"
    assert config.items == ["A", "B"]
    assert config.weights is None
    assert config.seed is None
    assert config.invalid_weights == "reject"


def test_from_dict_full():
    config = SamplerConfig.from_dict(LOOT_TABLE)
    assert config.weights == LOOT_TABLE["weights"]
    assert config.seed == 42
    assert config.resolve_items() == ["copper_coin", "health_potion", "iron_sword"]


@pytest.mark.parametrize(
    "data",
    [
        {"type": "shuffled", "items": ["A"]},
        {"items": "A,B"},
        {"items": []},
        {},
        {"weights": {}},
        {"weights": ["A"]},
        {"weights": {"A": "heavy"}},
        {"weights": {"A": True}},
        {"weights": {"A": -1.0}},
        {"weights": {"A": float("inf")}},
        {"type": "uniform", "items": ["A"], "weights": {"A": 2.0}},
        {"items": ["A"], "seed": "42"},
        {"items": ["A"], "seed": 1.5},
        {"weights": {"A": 1e20}},
        {"weights": {"A": float("nan")}},
        {"items": ["A"], "invalid_weights": "ignore"},
    ],
)
def test_from_dict_rejects_invalid_fields(data):
    with pytest.raises(ValueError):
        SamplerConfig.from_dict(data)


def test_from_dict_clamp_policy_accepts_negative_weights():
    config = SamplerConfig.from_dict({"weights": {"A": -1.0, "B": 1.0}, "invalid_weights": "clamp"})
    assert config.invalid_weights == "clamp"

    sampler = make_sampler(sampler_config=config)
    assert sampler.get_weight("A") == 0.0


def test_resolve_items_prefers_explicit_items():
    config = SamplerConfig(items=["A", "B"], weights={"A": 2.0, "C": 1.0})
    assert config.resolve_items() == ["A", "B"]


def test_load_sampler_config_from_path(tmp_path):
    config_path = write_config(tmp_path / "loot.json", LOOT_TABLE)

    config = load_sampler_config(str(config_path))
    assert isinstance(config, SamplerConfig)
    assert config.weights == LOOT_TABLE["weights"]


def test_load_sampler_config_from_env(tmp_path, monkeypatch):
    config_path = write_config(tmp_path / "loot.json", LOOT_TABLE)
    monkeypatch.setenv(SAMPLER_CONFIG_ENV_VAR, str(config_path))

    config = load_sampler_config()
    assert config is not None
    assert config.seed == 42


def test_load_sampler_config_without_any_path():
    assert load_sampler_config() is None


def test_load_sampler_config_failures_return_none(tmp_path, caplog):
    caplog.set_level(logging.WARNING)

    assert load_sampler_config(str(tmp_path / "missing.json")) is None
    assert "not found" in caplog.text

    yaml_path = tmp_path / "loot.yaml"
    yaml_path.write_text("type: weighted")
    assert load_sampler_config(str(yaml_path)) is None

    broken_path = tmp_path / "broken.json"
    broken_path.write_text("{not json")
    assert load_sampler_config(str(broken_path)) is None

    invalid_path = write_config(tmp_path / "invalid.json", {"type": "weighted", "weights": {"A": -1}})
    assert load_sampler_config(str(invalid_path)) is None
    assert "Invalid sampler configuration" in caplog.text


def test_make_sampler_from_weighted_dict():
    sampler = make_sampler(sampler_config=LOOT_TABLE)
    assert isinstance(sampler, WeightedBagSampler)
    assert sampler.cycle_size == 10

    assert Counter(sampler.draw(10)) == {"copper_coin": 6, "health_potion": 3, "iron_sword": 1}


def test_make_sampler_from_uniform_dict():
    sampler = make_sampler(sampler_config={"type": "uniform", "items": ["A", "B", "C"], "seed": 1})
    assert isinstance(sampler, UniformBagSampler)
    assert sorted(sampler.draw(3)) == ["A", "B", "C"]


def test_make_sampler_items_override_config():
    sampler = make_sampler(items=["copper_coin", "gem"], sampler_config=LOOT_TABLE)
    assert sampler.original_items == ("copper_coin", "gem")
    assert sampler.get_weight("copper_coin") == 6.0
    assert sampler.get_weight("gem") == 1.0
    assert sampler.get_weight("iron_sword") == 0.0


def test_make_sampler_is_reproducible():
    first = make_sampler(sampler_config=LOOT_TABLE)
    second = make_sampler(sampler_config=LOOT_TABLE)
    assert first.draw(40) == second.draw(40)


def test_make_sampler_from_config_path(tmp_path):
    config_path = write_config(tmp_path / "loot.json", LOOT_TABLE)

    sampler = make_sampler(config_path=str(config_path))
    assert isinstance(sampler, WeightedBagSampler)
    assert sampler.seed == 42


def test_make_sampler_without_config_is_uniform():
    sampler = make_sampler(items=["A", "B"])
    assert isinstance(sampler, UniformBagSampler)
    assert sampler.seed is None

    with pytest.raises(ValueError):
        make_sampler()


def test_make_sampler_propagates_errors():
    with pytest.raises(ValueError):
        make_sampler(sampler_config={"type": "shuffled", "items": ["A"]})

    with pytest.raises(EmptyItemSetError):
        make_sampler(items=[], sampler_config={"type": "uniform", "items": ["A"]})


def test_from_dict_accepts_any_int_seed():
    config = SamplerConfig.from_dict({"type": "uniform", "items": ["A", "B"], "seed": -7})
    assert config.seed == -7

    sampler = make_sampler(sampler_config=config)
    assert sorted(sampler.draw(2)) == ["A", "B"]


def test_from_dict_weight_errors_name_the_item():
    with pytest.raises(ValueError, match="iron_sword"):
        SamplerConfig.from_dict({"weights": {"copper_coin": 1.0, "iron_sword": -2.0}})


def test_find_config_file(tmp_path, monkeypatch):
    config_path = write_config(tmp_path / "loot.json", LOOT_TABLE)
    other_path = write_config(tmp_path / "other.json", LOOT_TABLE)

    assert find_config_file() is None
    assert find_config_file(str(config_path)) == config_path

    # An explicit path wins over the environment variable
    monkeypatch.setenv(SAMPLER_CONFIG_ENV_VAR, str(other_path))
    assert find_config_file() == other_path
    assert find_config_file(str(config_path)) == config_path

    assert find_config_file(str(tmp_path / "loot.yaml")) is None
    assert find_config_file(str(tmp_path)) is None
