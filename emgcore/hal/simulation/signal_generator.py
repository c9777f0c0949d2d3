"""Generation of complete simulated EMG samples."""

from __future__ import annotations

import math
import random
import time
from typing import Optional, Sequence

from ..types import EmgSample, GestureType, QualityMetrics
from .artifact_injection import ArtifactInjector
from .config import SimulationConfig
from .muscle_model import MuscleModel
from .noise_models import NoiseModel

_TWO_PI = 2.0 * math.pi
_MIN_IMPEDANCE = 100.0
_SATURATION_LEVEL = 0.95


def _snr_db(signal_power: float, noise_power: float) -> float:
    if not noise_power > 0.0:
        return 60.0
    ratio = signal_power / noise_power
    if math.isnan(ratio):
        return math.nan
    if ratio == 0.0:
        return -math.inf
    return 10.0 * math.log10(ratio)


class EmgSignalGenerator:
    """Produces multi-channel samples from the muscle, noise and artifact models."""

    def __init__(self, config: SimulationConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self._rng = rng if rng is not None else random.Random()
        self.muscle_model = MuscleModel(config.muscle_config, self._rng)
        self.noise_model = NoiseModel(config.noise_config, self._rng)
        self.artifact_injector = ArtifactInjector(config.artifact_config, self._rng)
        self._sequence = 0
        self.phase_accumulator = 0.0

    def generate_sample(self, gesture: GestureType, activation_level: float) -> EmgSample:
        """One sample across every channel while performing ``gesture``."""
        channels = []
        for channel_idx in range(self.config.channel_count):
            base = self.muscle_model.generate_activation(gesture, activation_level, channel_idx)
            noisy = self.noise_model.add_noise(base)
            channels.append(self.artifact_injector.maybe_inject_artifact(noisy))

        self.phase_accumulator += _TWO_PI / self.config.sample_rate_hz
        if self.phase_accumulator > _TWO_PI:
            self.phase_accumulator -= _TWO_PI

        quality = self._quality_metrics(channels)
        sequence = self._sequence
        self._sequence += 1
        return EmgSample(
            timestamp=time.time_ns() // 1000,  # microseconds since the epoch
            sequence=sequence,
            channels=channels,
            quality_indicators=quality,
        )

    def _quality_metrics(self, channels: Sequence[float]) -> QualityMetrics:
        if channels:
            signal_power = sum(x * x for x in channels) / len(channels)
        else:
            signal_power = math.nan
        noise_cfg = self.config.noise_config
        noise_power = 10.0 ** (noise_cfg.thermal_noise_power_dbm / 10.0) / 1000.0

        impedances = [
            max(
                noise_cfg.electrode_impedance_base
                + (self._rng.random() - 0.5) * noise_cfg.electrode_impedance_variance,
                _MIN_IMPEDANCE,
            )
            for _ in channels
        ]

        return QualityMetrics(
            snr_db=_snr_db(signal_power, noise_power),
            contact_impedance_kohm=impedances,
            artifact_detected=self.artifact_injector.last_injection_occurred(),
            signal_saturation=any(abs(x) > _SATURATION_LEVEL for x in channels),
        )