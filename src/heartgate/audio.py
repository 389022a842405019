from __future__ import annotations

import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


# --- "Pew" tuning knobs ---
PEW_START_HZ = 880.0
PEW_END_HZ = 420.0
PEW_SWEEP_S = 0.2
PEW_PEAK_GAIN = 0.25
PEW_FLOOR_GAIN = 0.0001
PEW_ATTACK_S = 0.02
PEW_RELEASE_END_S = 0.26
PEW_DURATION_S = 0.27


def _exp_ramp(t: np.ndarray, t0: float, t1: float, v0: float, v1: float) -> np.ndarray:
    frac = np.clip((t - t0) / (t1 - t0), 0.0, 1.0)
    return v0 * (v1 / v0) ** frac


def pew_waveform(sample_rate: int = 44100, volume: float = 1.0) -> np.ndarray:
    """
    Completion chirp: a triangle wave gliding down from 880 Hz to 420 Hz with a fast
    exponential attack and a slower exponential release.
    """

    n = int(round(sample_rate * PEW_DURATION_S))
    t = np.arange(n, dtype=np.float64) / float(sample_rate)

    freq = _exp_ramp(t, 0.0, PEW_SWEEP_S, PEW_START_HZ, PEW_END_HZ)
    phase = 2.0 * np.pi * np.cumsum(freq) / float(sample_rate)
    tri = (2.0 / np.pi) * np.arcsin(np.sin(phase))

    gain = np.where(
        t < PEW_ATTACK_S,
        _exp_ramp(t, 0.0, PEW_ATTACK_S, PEW_FLOOR_GAIN, PEW_PEAK_GAIN),
        _exp_ramp(t, PEW_ATTACK_S, PEW_RELEASE_END_S, PEW_PEAK_GAIN, PEW_FLOOR_GAIN),
    )

    volume = max(0.0, min(1.0, volume))
    return (tri * gain * volume).astype(np.float32)


class PewPlayer:
    """
    Plays the completion chirp without blocking the frame loop.

    Audio is optional: if PortAudio is missing or the device refuses the stream, the player logs
    once and goes quiet.
    """

    def __init__(self, sample_rate: int = 44100, volume: float = 1.0, enabled: bool = True) -> None:
        self.sample_rate = sample_rate
        self.enabled = enabled
        self._wave = pew_waveform(sample_rate, volume)
        self._sd: Optional[object] = None

    def _device(self):
        if self._sd is None:
            import sounddevice as sd  # type: ignore

            self._sd = sd
        return self._sd

    def play(self) -> None:
        if not self.enabled:
            return
        try:
            sd = self._device()
        except (OSError, ImportError) as e:
            # sounddevice raises OSError at import when the PortAudio library is missing.
            self._disable(e)
            return
        try:
            sd.play(self._wave, samplerate=self.sample_rate, blocking=False)
        except sd.PortAudioError as e:
            self._disable(e)

    def _disable(self, err: BaseException) -> None:
        logger.warning("audio unavailable, muting: %s", err)
        self.enabled = False

    def stop(self) -> None:
        if self._sd is not None:
            self._sd.stop()

    def __enter__(self) -> "PewPlayer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
