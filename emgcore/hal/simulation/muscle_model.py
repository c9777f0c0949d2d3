"""Muscle fibre, recruitment and fatigue model for simulated EMG."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from ..types import GestureType
from .config import MuscleConfig

_TWO_PI = 2.0 * math.pi


@dataclass
class FrequencyProfile:
    """Spectral character of a gesture's EMG."""

    dominant_frequency_hz: float
    frequency_spread: float
    high_frequency_component: float


@dataclass
class ActivationPattern:
    """Which channels a gesture drives, and how strongly."""

    primary_channels: list[int]
    activation_weights: list[float]
    frequency_profile: FrequencyProfile
    onset_delay_ms: float


class MuscleFiberType(Enum):
    """Motor unit fibre types."""

    TYPE_I = "TypeI"  # slow-twitch, low force, fatigue resistant
    TYPE_IIA = "TypeIIa"  # fast-twitch, moderate force
    TYPE_IIX = "TypeIIx"  # fast-twitch, high force, fatigues quickly


_RECOVERY_SCALE = {
    MuscleFiberType.TYPE_I: 1.5,
    MuscleFiberType.TYPE_IIA: 1.0,
    MuscleFiberType.TYPE_IIX: 0.7,
}

_DEFAULT_FIBER_TYPES = (
    MuscleFiberType.TYPE_I,
    MuscleFiberType.TYPE_IIA,
    MuscleFiberType.TYPE_I,
    MuscleFiberType.TYPE_IIX,
    MuscleFiberType.TYPE_I,
    MuscleFiberType.TYPE_IIA,
    MuscleFiberType.TYPE_I,
    MuscleFiberType.TYPE_IIX,
)


class FatigueModel:
    """Per-channel fatigue that builds with activation and slowly recovers."""

    MIN_CAPACITY = 0.3
    MAX_FATIGUE = 0.7

    def __init__(self, fiber_types: Sequence[MuscleFiberType], config: MuscleConfig) -> None:
        self.fiber_fatigue_levels: list[float] = [0.0] * len(fiber_types)
        self.recovery_rates: list[float] = [
            config.recovery_rate * _RECOVERY_SCALE[fiber] for fiber in fiber_types
        ]
        self.current_mvc_factor = 1.0

    def fatigue_factor(self, channel_idx: int) -> float:
        """Remaining capacity of a channel, never below 30 %."""
        if 0 <= channel_idx < len(self.fiber_fatigue_levels):
            level = self.fiber_fatigue_levels[channel_idx]
        else:
            level = 0.0
        return max(1.0 - level, self.MIN_CAPACITY)

    def update_fatigue(self, channel_idx: int, activation_level: float) -> None:
        """Accumulate fatigue from one sample of activation, then recover."""
        if not 0 <= channel_idx < len(self.fiber_fatigue_levels):
            return
        fatigue = self.fiber_fatigue_levels[channel_idx] + activation_level * 0.001
        fatigue = min(fatigue, self.MAX_FATIGUE)
        if channel_idx < len(self.recovery_rates):
            fatigue -= self.recovery_rates[channel_idx] * 0.0001
            fatigue = max(fatigue, 0.0)
        self.fiber_fatigue_levels[channel_idx] = fatigue


def _gesture_patterns() -> dict[GestureType, ActivationPattern]:
    return {
        # flexor muscles
        GestureType.HAND_CLOSE: ActivationPattern(
            primary_channels=[0, 1, 4, 5],
            activation_weights=[0.9, 0.8, 0.7, 0.6, 0.3, 0.2, 0.1, 0.1],
            frequency_profile=FrequencyProfile(85.0, 25.0, 0.3),
            onset_delay_ms=80.0,
        ),
        # extensor muscles
        GestureType.HAND_OPEN: ActivationPattern(
            primary_channels=[2, 3, 6, 7],
            activation_weights=[0.2, 0.3, 0.9, 0.8, 0.1, 0.2, 0.7, 0.6],
            frequency_profile=FrequencyProfile(75.0, 20.0, 0.25),
            onset_delay_ms=120.0,
        ),
        GestureType.WRIST_FLEXION: ActivationPattern(
            primary_channels=[0, 4],
            activation_weights=[0.8, 0.3, 0.1, 0.1, 0.9, 0.2, 0.1, 0.1],
            frequency_profile=FrequencyProfile(90.0, 30.0, 0.4),
            onset_delay_ms=60.0,
        ),
        GestureType.WRIST_EXTENSION: ActivationPattern(
            primary_channels=[2, 6],
            activation_weights=[0.1, 0.1, 0.8, 0.3, 0.1, 0.1, 0.9, 0.2],
            frequency_profile=FrequencyProfile(80.0, 25.0, 0.35),
            onset_delay_ms=70.0,
        ),
    }


def _powf(base: float, exponent: float) -> float:
    if base < 0.0 and not float(exponent).is_integer():
        return math.nan
    return base**exponent


class MuscleModel:
    """Generates per-channel muscle activity for a gesture."""

    def __init__(self, config: MuscleConfig, rng: Optional[random.Random] = None) -> None:
        self.config = MuscleConfig(**vars(config))
        self.fiber_types: list[MuscleFiberType] = list(_DEFAULT_FIBER_TYPES)
        self.activation_patterns: dict[GestureType, ActivationPattern] = _gesture_patterns()
        self.fatigue_model = FatigueModel(self.fiber_types, self.config)
        self._rng = rng if rng is not None else random.Random()

    def generate_activation(
        self, gesture: GestureType, activation_level: float, channel_idx: int
    ) -> float:
        """One sample of EMG for a channel while performing ``gesture``."""
        pattern = self.activation_patterns.get(gesture)
        if pattern is None:
            return self._rest_signal()

        weights = pattern.activation_weights
        weight = weights[channel_idx] if 0 <= channel_idx < len(weights) else 0.0
        if weight == 0.0:
            return self._rest_signal()

        effective = activation_level * weight * self.fatigue_model.fatigue_factor(channel_idx)
        signal = self._muap_train(effective, pattern.frequency_profile)
        self.fatigue_model.update_fatigue(channel_idx, effective)
        return signal

    def _rest_signal(self) -> float:
        return (self._rng.random() - 0.5) * 0.01

    def _muap_train(self, activation_level: float, profile: FrequencyProfile) -> float:
        rng = self._rng
        firing_rate = 8.0 + activation_level * profile.dominant_frequency_hz
        amplitude_variation = 1.0 + (rng.random() - 0.5) * 0.3
        recruitment = _powf(activation_level, self.config.fiber_recruitment_curve)

        phase = rng.random() * _TWO_PI
        base = math.sin(firing_rate * phase) * recruitment
        high = math.sin(firing_rate * 3.0 * phase) * profile.high_frequency_component * recruitment
        return (base + high) * amplitude_variation * self.config.maximum_voluntary_contraction