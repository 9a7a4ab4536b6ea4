from __future__ import annotations

import logging
import threading
from typing import Any

import numpy as np

from .automation import Voice

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 44_100
DEFAULT_BLOCKSIZE = 512


class SoundDeviceOutput:
    """PortAudio output stream that mixes the live voices in its callback."""

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        blocksize: int = DEFAULT_BLOCKSIZE,
        device: int | str | None = None,
    ) -> None:
        self.sample_rate = int(sample_rate)
        self.blocksize = int(blocksize)
        self.device = device
        self._stream: Any = None
        self._failed = False
        self._frames = 0
        self._voices: list[Voice] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # AudioOutput
    # ------------------------------------------------------------------
    @property
    def available(self) -> bool:
        return self._stream is not None

    @property
    def suspended(self) -> bool:
        return self._stream is not None and self._stream.stopped

    @property
    def current_time(self) -> float:
        with self._lock:
            return self._frames / self.sample_rate

    def init(self) -> bool:
        if self._stream is not None or self._failed:
            return self.available
        try:
            import sounddevice as sd
        except OSError as exc:
            # Raised when the PortAudio shared library is missing.
            logger.warning("Audio output unavailable, tones are disabled: %s", exc)
            self._failed = True
            return False

        try:
            stream = sd.OutputStream(
                samplerate=self.sample_rate,
                blocksize=self.blocksize,
                device=self.device,
                channels=1,
                dtype="float32",
                callback=self._callback,
            )
        except (sd.PortAudioError, ValueError) as exc:
            logger.warning("Could not open audio output, tones are disabled: %s", exc)
            self._failed = True
            return False

        try:
            stream.start()
        except sd.PortAudioError as exc:
            stream.close()
            logger.warning("Could not start audio output, tones are disabled: %s", exc)
            self._failed = True
            return False

        self._stream = stream
        logger.debug(
            "Audio output started: %d Hz, blocksize %d, device %s", self.sample_rate, self.blocksize, self.device
        )
        return True

    def resume(self) -> None:
        if self.suspended:
            logger.debug("Resuming suspended audio output")
            self._stream.start()

    def create_voice(self, frequency_hz: float) -> Voice:
        voice = Voice(frequency_hz, start_time=self.current_time)
        with self._lock:
            self._voices.append(voice)
        return voice

    def release_voice(self, voice: Voice, when: float) -> None:
        voice.stop_at(when)

    def teardown(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.stop()
            stream.close()
            logger.debug("Audio output closed")
        with self._lock:
            self._voices.clear()
            self._frames = 0

    # ------------------------------------------------------------------
    # Realtime callback
    # ------------------------------------------------------------------
    def _callback(self, outdata: np.ndarray, frames: int, time_info: Any, status: Any) -> None:
        if status:
            logger.debug("Audio callback status: %s", status)
        with self._lock:
            start = self._frames
            voices = list(self._voices)
        times = (start + np.arange(frames)) / self.sample_rate
        mix = np.zeros(frames, dtype=np.float64)
        for voice in voices:
            mix += voice.render(times, self.sample_rate)
        outdata[:, 0] = mix.astype(np.float32)

        end_time = (start + frames) / self.sample_rate
        with self._lock:
            self._frames = start + frames
            self._voices = [voice for voice in self._voices if not voice.finished(end_time)]
