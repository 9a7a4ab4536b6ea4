"""Single-voice tone playback."""

from .automation import GainParam, Voice
from .device import SoundDeviceOutput
from .engine import ToneEngine, ToneState
from .output import AudioOutput

__all__ = [
    "AudioOutput",
    "GainParam",
    "SoundDeviceOutput",
    "ToneEngine",
    "ToneState",
    "Voice",
]
