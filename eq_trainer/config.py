from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from .audio.device import DEFAULT_BLOCKSIZE, DEFAULT_SAMPLE_RATE
from .audio.engine import ATTACK_SECONDS, RELEASE_SECONDS, TONE_LEVEL
from .response import DEFAULT_SAMPLE_COUNT

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "eq_trainer.json"
RECIPES_FILENAME = "recipes.json"


@dataclass
class AppConfig:
    sample_rate: int = DEFAULT_SAMPLE_RATE
    blocksize: int = DEFAULT_BLOCKSIZE
    device: int | str | None = None
    tone_level: float = TONE_LEVEL
    attack_seconds: float = ATTACK_SECONDS
    release_seconds: float = RELEASE_SECONDS
    curve_points: int = DEFAULT_SAMPLE_COUNT
    recipes_file: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "AppConfig":
        if not isinstance(data, dict):
            raise ValueError("Config file must be a JSON object")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

        config = cls()
        if "sample_rate" in data:
            config.sample_rate = int(data["sample_rate"])
        if "blocksize" in data:
            config.blocksize = int(data["blocksize"])
        if "device" in data:
            config.device = data["device"]
        for key in ("tone_level", "attack_seconds", "release_seconds"):
            if key in data:
                setattr(config, key, float(data[key]))
        if "curve_points" in data:
            config.curve_points = int(data["curve_points"])
        if data.get("recipes_file"):
            recipes_path = Path(data["recipes_file"])
            if not recipes_path.is_absolute() and base_dir is not None:
                recipes_path = (base_dir / recipes_path).resolve()
            config.recipes_file = recipes_path

        if config.sample_rate <= 0:
            raise ValueError("'sample_rate' must be positive")
        if config.curve_points < 2:
            raise ValueError("'curve_points' must be at least 2")
        if not 0.0 <= config.tone_level <= 1.0:
            raise ValueError("'tone_level' must lie within [0, 1]")
        return config

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["recipes_file"] = str(self.recipes_file) if self.recipes_file else None
        return payload


def determine_config_path(user_path: Path | None) -> Path | None:
    if user_path is not None:
        if not user_path.exists():
            raise FileNotFoundError(f"Config file '{user_path}' does not exist")
        return user_path

    auto_path = Path(CONFIG_FILENAME)
    if auto_path.exists():
        return auto_path
    return None


def load_config(path: Path | None) -> AppConfig:
    if path is None:
        return AppConfig()
    data = json.loads(path.read_text(encoding="utf-8"))
    config = AppConfig.from_dict(data, base_dir=path.parent.resolve())
    logger.debug("Loaded config from %s", path)
    return config


def determine_recipes_path(user_path: Path | None, config: AppConfig) -> Path | None:
    if user_path is not None:
        if not user_path.exists():
            raise FileNotFoundError(f"Recipe file '{user_path}' does not exist")
        return user_path
    if config.recipes_file is not None:
        return config.recipes_file

    auto_path = Path(RECIPES_FILENAME)
    if auto_path.exists():
        return auto_path
    return None
