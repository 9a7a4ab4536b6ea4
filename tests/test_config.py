import json
import logging
from pathlib import Path

import pytest

from eq_trainer.config import (
    AppConfig,
    determine_config_path,
    determine_recipes_path,
    load_config,
)


def test_defaults():
    config = load_config(None)
    assert config == AppConfig()
    assert config.sample_rate == 44_100
    assert config.tone_level == 0.1
    assert config.curve_points == 301
    assert config.recipes_file is None


def test_load_file_resolves_recipes_relative_to_config(tmp_path):
    path = tmp_path / "eq_trainer.json"
    path.write_text(
        json.dumps({"sample_rate": 48000, "tone_level": 0.2, "curve_points": 120, "recipes_file": "my_recipes.json"}),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.sample_rate == 48_000
    assert config.tone_level == 0.2
    assert config.curve_points == 120
    assert config.recipes_file == (tmp_path / "my_recipes.json").resolve()
    assert config.to_dict()["recipes_file"] == str(config.recipes_file)


def test_unknown_keys_are_logged(caplog):
    with caplog.at_level(logging.WARNING):
        config = AppConfig.from_dict({"volume": 11})
    assert config == AppConfig()
    assert "volume" in caplog.text


@pytest.mark.parametrize(
    "payload",
    [{"sample_rate": 0}, {"curve_points": 1}, {"tone_level": 1.5}, {"tone_level": -0.1}],
)
def test_invalid_values(payload):
    with pytest.raises(ValueError):
        AppConfig.from_dict(payload)


def test_config_must_be_object():
    with pytest.raises(ValueError):
        AppConfig.from_dict([1, 2, 3])


def test_determine_config_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert determine_config_path(None) is None
    with pytest.raises(FileNotFoundError):
        determine_config_path(tmp_path / "missing.json")

    (tmp_path / "eq_trainer.json").write_text("{}", encoding="utf-8")
    assert determine_config_path(None) == Path("eq_trainer.json")


def test_determine_recipes_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = AppConfig()
    assert determine_recipes_path(None, config) is None
    with pytest.raises(FileNotFoundError):
        determine_recipes_path(tmp_path / "missing.json", config)

    (tmp_path / "recipes.json").write_text("[]", encoding="utf-8")
    assert determine_recipes_path(None, config) == Path("recipes.json")

    config.recipes_file = tmp_path / "elsewhere.json"
    assert determine_recipes_path(None, config) == tmp_path / "elsewhere.json"
