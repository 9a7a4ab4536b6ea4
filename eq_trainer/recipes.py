from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .response import FilterSet

STEP_KINDS = ("boost", "cut")


@dataclass(frozen=True)
class RecipeStep:
    frequency: str
    action: str
    kind: str
    reason: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecipeStep":
        frequency = str(data.get("frequency", data.get("freq", ""))).strip()
        action = str(data.get("action", "")).strip()
        if not frequency or not action:
            raise ValueError("Each recipe step requires 'freq' and 'action' fields")
        kind = str(data.get("kind", data.get("type", "cut"))).lower()
        if kind not in STEP_KINDS:
            raise ValueError(f"Recipe step type must be one of {', '.join(STEP_KINDS)}, got '{kind}'")
        return cls(frequency=frequency, action=action, kind=kind, reason=str(data.get("reason", "")))


@dataclass(frozen=True)
class Recipe:
    name: str
    category: str
    description: str
    filter_set: FilterSet
    steps: tuple[RecipeStep, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        name = str(data.get("name", "")).strip()
        if not name:
            raise ValueError("Each recipe requires a non-empty 'name'")
        curve = data.get("curve", data.get("filter_set"))
        if curve is None:
            raise ValueError(f"Recipe '{name}' must define a 'curve' object")
        steps = data.get("steps") or []
        if not isinstance(steps, list):
            raise ValueError(f"Recipe '{name}': 'steps' must be a list")
        return cls(
            name=name,
            category=str(data.get("category", data.get("type", ""))),
            description=str(data.get("description", data.get("desc", ""))),
            filter_set=FilterSet.from_dict(curve),
            steps=tuple(RecipeStep.from_dict(step) for step in steps),
        )


@dataclass(frozen=True)
class TrainerOption:
    frequency_hz: int
    label: str
    description: str


TRAINER_OPTIONS: tuple[TrainerOption, ...] = (
    TrainerOption(80, "Sub-bass", "Weight and pressure"),
    TrainerOption(200, "Mud", "Clouds the mix"),
    TrainerOption(500, "Body", "Balance of the tone"),
    TrainerOption(1000, "Presence", "The face of the sound"),
    TrainerOption(2500, "Bite", "Aggression"),
    TrainerOption(4000, "Harshness", "Tires the ear"),
    TrainerOption(8000, "Air", "Definition and space"),
    TrainerOption(10000, "Fizz", "Noise and dirt"),
)


@dataclass(frozen=True)
class FrequencyTip:
    upper_hz: float
    title: str
    description: str


# Ordered by upper bound; the last entry covers everything above.
FREQUENCY_TIPS: tuple[FrequencyTip, ...] = (
    FrequencyTip(60, "Sub-bass (felt)", "Below the musical range of a guitar. It only clutters the PA. Always cut."),
    FrequencyTip(150, "Meat / Fundamental", "The weight of the note (100 Hz). Essential for rhythm, risky in excess."),
    FrequencyTip(300, "Rumble", "Fights with the bass. In fast leads, a cut up to 200 Hz cleans up the playing."),
    FrequencyTip(600, "Cardboard / Mud", "Nasal, boxy and cheap. A subtle cut around 400 Hz opens up the mix."),
    FrequencyTip(900, "Honk (Tube Screamer)", "720 Hz lives here: the classic radio or green overdrive sound."),
    FrequencyTip(2_000, "Face / Attack", "1-1.5 kHz brings the instrument to the front of the speaker."),
    FrequencyTip(3_500, "Bite", "2.5 kHz is rock aggression. It lets the guitar cut through the wall of sound."),
    FrequencyTip(5_000, "Harshness", "4 kHz causes pain and listening fatigue. Usually needs a notch."),
    FrequencyTip(10_000, "Brilliance / Presence", "8 kHz gives the expensive-studio air. Above 10 kHz is just hiss."),
    FrequencyTip(math.inf, "Digital fizz", "Extreme highs that are useless for guitar. Use a low-pass to cut them."),
)


def frequency_tip(frequency_hz: float) -> FrequencyTip:
    for tip in FREQUENCY_TIPS:
        if frequency_hz < tip.upper_hz:
            return tip
    return FREQUENCY_TIPS[-1]


_DEFAULT_RECIPES: list[dict[str, Any]] = [
    {
        "name": "Clean Lead (Pop/Worship)",
        "category": "Guitar - Lead",
        "description": "Pushes the front-facing frequencies to make up for the lack of natural compression.",
        "curve": {"hp": 100, "lp": 12000, "boosts": [{"f": 1000, "g": 5}, {"f": 8000, "g": 3}], "cuts": []},
        "steps": [
            {
                "freq": "100-120 Hz",
                "action": "High pass",
                "type": "cut",
                "reason": "Cleans the low mess but keeps the body.",
            },
            {
                "freq": "1 kHz",
                "action": "Wide boost (+4 dB)",
                "type": "boost",
                "reason": "Brings the guitar to the front of the mix.",
            },
            {
                "freq": "8 kHz",
                "action": "Gentle boost (+2 dB)",
                "type": "boost",
                "reason": "Adds air and studio shine.",
            },
        ],
    },
    {
        "name": "High Gain Lead (Shred)",
        "category": "Guitar - Distortion",
        "description": "Subtractive: removes the excess to stay defined at speed.",
        "curve": {"hp": 200, "lp": 10000, "boosts": [{"f": 2500, "g": 3}], "cuts": [{"f": 4000, "g": -4}]},
        "steps": [
            {
                "freq": "200 Hz",
                "action": "Steep high pass",
                "type": "cut",
                "reason": "Removes the rumble that smears with the double kick.",
            },
            {
                "freq": "2.5 kHz",
                "action": "Subtle boost (+2 dB)",
                "type": "boost",
                "reason": "Adds bite to cut through the distortion.",
            },
            {
                "freq": "4 kHz",
                "action": "Notch cut (-4 dB)",
                "type": "cut",
                "reason": "Removes the shrill band that tires the ear.",
            },
            {"freq": "10 kHz", "action": "Low pass", "type": "cut", "reason": "Removes digital fizz and hiss."},
        ],
    },
    {
        "name": "Rock Rhythm (Crunch)",
        "category": "Guitar - Rhythm",
        "description": "Classic rock tone centred on the mids to fill the space.",
        "curve": {"hp": 100, "lp": 12000, "boosts": [{"f": 720, "g": 4}], "cuts": [{"f": 300, "g": -2}]},
        "steps": [
            {"freq": "100 Hz", "action": "High pass", "type": "cut", "reason": "Keeps the fundamental weight."},
            {"freq": "300 Hz", "action": "Light cut", "type": "cut", "reason": "Cleans some humbucker mud."},
            {
                "freq": "720 Hz",
                "action": "Boost (+4 dB)",
                "type": "boost",
                "reason": "Tube Screamer territory: the classic rock honk.",
            },
        ],
    },
    {
        "name": "Modern Metal Rhythm",
        "category": "Guitar - Rhythm",
        "description": "Scooped modern tone, kept under control so it does not disappear.",
        "curve": {
            "hp": 80,
            "lp": 11000,
            "boosts": [{"f": 6000, "g": 3}, {"f": 100, "g": 2}],
            "cuts": [{"f": 800, "g": -4}],
        },
        "steps": [
            {
                "freq": "80 Hz",
                "action": "High pass",
                "type": "cut",
                "reason": "A lower cut that leaves room for the 7th-string chug.",
            },
            {
                "freq": "800 Hz",
                "action": "Wide cut",
                "type": "cut",
                "reason": "Removes the radio sound so the tone gets more aggressive.",
            },
            {"freq": "6 kHz", "action": "Boost", "type": "boost", "reason": "Lifts pick attack in high gain."},
        ],
    },
    {
        "name": "Ambient Clean (Post-Rock)",
        "category": "Guitar - Texture",
        "description": "Ethereal tone for heavy reverb and delay that does not get muddy.",
        "curve": {"hp": 200, "lp": 6000, "boosts": [{"f": 400, "g": 3}], "cuts": [{"f": 2000, "g": -2}]},
        "steps": [
            {
                "freq": "200 Hz",
                "action": "High pass",
                "type": "cut",
                "reason": "Reverb adds artificial lows, so cut them at the source.",
            },
            {
                "freq": "400 Hz",
                "action": "Warm boost",
                "type": "boost",
                "reason": "Gives warmth and body to long notes.",
            },
            {
                "freq": "6 kHz",
                "action": "Low pass",
                "type": "cut",
                "reason": "Makes the tone darker and more cinematic.",
            },
        ],
    },
    {
        "name": "Steel-String Acoustic (Strumming)",
        "category": "Acoustic - Rhythm",
        "description": "Removes the boxy piezo sound and brings out the shine of new strings.",
        "curve": {"hp": 80, "lp": 15000, "boosts": [{"f": 10000, "g": 4}], "cuts": [{"f": 350, "g": -5}]},
        "steps": [
            {
                "freq": "80 Hz",
                "action": "High pass",
                "type": "cut",
                "reason": "Avoids the boom when hitting open strings.",
            },
            {
                "freq": "350 Hz",
                "action": "Deep cut",
                "type": "cut",
                "reason": "Removes the cardboard-box sound of piezo pickups.",
            },
            {
                "freq": "10 kHz",
                "action": "High shelf (+4 dB)",
                "type": "boost",
                "reason": "Brings out the air and metallic shine of steel strings.",
            },
        ],
    },
    {
        "name": "Djent / 8-String",
        "category": "Guitar - Extreme",
        "description": "Tight low end for very low tunings.",
        "curve": {"hp": 60, "lp": 11000, "boosts": [{"f": 1400, "g": 4}], "cuts": [{"f": 500, "g": -3}]},
        "steps": [
            {
                "freq": "60-80 Hz",
                "action": "High pass",
                "type": "cut",
                "reason": "Clears the sub region so the bass can shine.",
            },
            {"freq": "500 Hz", "action": "Cut", "type": "cut", "reason": "Removes the mud that blurs the low strings."},
            {
                "freq": "1.4 kHz",
                "action": "Aggressive boost",
                "type": "boost",
                "reason": "Accents the pick attack, the djent sound itself.",
            },
        ],
    },
    {
        "name": "Fuzz Lead (Stoner)",
        "category": "Guitar - Lead",
        "description": "Lets the fuzz cut through without sounding thin or buzzy.",
        "curve": {"hp": 150, "lp": 8000, "boosts": [{"f": 900, "g": 4}], "cuts": [{"f": 4000, "g": -3}]},
        "steps": [
            {
                "freq": "900 Hz",
                "action": "Mid boost",
                "type": "boost",
                "reason": "Makes up for the natural scoop of Big Muff style pedals.",
            },
            {
                "freq": "4 kHz",
                "action": "Gentle cut",
                "type": "cut",
                "reason": "Tames the unpleasant shrillness of fuzz.",
            },
            {"freq": "8 kHz", "action": "Low pass", "type": "cut", "reason": "Removes the hiss that is not musical."},
        ],
    },
]


def default_recipes() -> list[Recipe]:
    return [Recipe.from_dict(entry) for entry in _DEFAULT_RECIPES]


def load_recipes(path: Path | None) -> list[Recipe]:
    """Recipes from ``path`` when it exists, the built-in set otherwise."""
    if path is None or not path.exists():
        return default_recipes()
    data = json.loads(path.read_text(encoding="utf-8"))
    entries = _normalize_entries(data)
    if entries is None:
        raise ValueError(f"Recipe file '{path}' must contain a list or an object with a 'recipes' array")
    recipes = [Recipe.from_dict(entry) for entry in entries if isinstance(entry, dict)]
    return recipes or default_recipes()


def find_recipe(recipes: list[Recipe], name: str) -> Recipe:
    lookup = name.strip().lower()
    for recipe in recipes:
        if recipe.name.lower() == lookup:
            return recipe
    matches = [recipe for recipe in recipes if lookup in recipe.name.lower()]
    if len(matches) == 1:
        return matches[0]
    available = ", ".join(recipe.name for recipe in recipes)
    raise ValueError(f"Unknown recipe '{name}'. Available recipes: {available}")


def _normalize_entries(data: Any) -> list[Any] | None:
    if isinstance(data, dict) and isinstance(data.get("recipes"), list):
        return data["recipes"]
    if isinstance(data, list):
        return data
    return None
