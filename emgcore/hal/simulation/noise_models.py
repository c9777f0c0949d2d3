"""Noise sources added to a simulated EMG signal."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional

from .config import NoiseConfig

_TWO_PI = 2.0 * math.pi


class _ThermalNoise:
    """Low-pass filtered Gaussian noise with a 1/f-like character."""

    def __init__(self, power_dbm: float, rng: random.Random) -> None:
        self.power_dbm = power_dbm
        self.previous_sample = 0.0
        self.alpha = 0.95
        self._rng = rng

    def _gaussian(self) -> float:
        u1 = 1.0 - self._rng.random()  # in (0, 1], keeps the logarithm finite
        u2 = self._rng.random()
        return math.sqrt(-2.0 * math.log(u1)) * math.cos(_TWO_PI * u2)

    def generate_sample(self) -> float:
        power_watts = 10.0 ** (self.power_dbm / 10.0) / 1000.0
        rms_voltage = math.sqrt(power_watts * 50.0)  # 50 ohm reference
        white = self._gaussian() * rms_voltage
        self.previous_sample = self.alpha * self.previous_sample + (1.0 - self.alpha) * white
        return self.previous_sample


@dataclass(frozen=True)
class _Harmonic:
    frequency_multiplier: float
    amplitude_factor: float
    phase_offset: float


_HARMONICS = (
    _Harmonic(1.0, 1.0, 0.0),
    _Harmonic(2.0, 0.3, math.pi / 4.0),
    _Harmonic(3.0, 0.15, math.pi / 6.0),
)


class _PowerlineNoise:
    """Mains interference with its second and third harmonics."""

    def __init__(self, frequency_hz: float, amplitude: float) -> None:
        self.frequency_hz = frequency_hz
        self.amplitude = amplitude

    def generate_sample(self, phase: float) -> float:
        interference = sum(
            math.sin(phase * h.frequency_multiplier + h.phase_offset) * h.amplitude_factor
            for h in _HARMONICS
        )
        return interference * self.amplitude


class _ElectrodeNoise:
    """Impedance-dependent contact noise with occasional bursts."""

    BURST_PROBABILITY = 0.001

    def __init__(self, base_impedance: float, impedance_variance: float, rng: random.Random) -> None:
        self.base_impedance = base_impedance
        self.impedance_variance = impedance_variance
        self.contact_noise_factor = 0.001
        self._rng = rng

    def generate_contact_noise(self) -> float:
        rng = self._rng
        impedance = self.base_impedance + (rng.random() - 0.5) * self.impedance_variance
        impedance_factor = min(impedance / self.base_impedance, 3.0)

        burst = 0.0
        if rng.random() < self.BURST_PROBABILITY:
            burst = (rng.random() - 0.5) * 0.1 * impedance_factor

        root = math.sqrt(impedance_factor) if impedance_factor >= 0.0 else math.nan
        continuous = (rng.random() - 0.5) * self.contact_noise_factor * root
        return burst + continuous


class NoiseModel:
    """Adds thermal, powerline and electrode noise to a clean signal."""

    def __init__(self, config: NoiseConfig, rng: Optional[random.Random] = None) -> None:
        self.config = NoiseConfig(**vars(config))
        self.powerline_phase = 0.0
        rng = rng if rng is not None else random.Random()
        self._thermal = _ThermalNoise(config.thermal_noise_power_dbm, rng)
        self._powerline = _PowerlineNoise(
            config.powerline_frequency_hz, config.powerline_amplitude_factor
        )
        self._electrode = _ElectrodeNoise(
            config.electrode_impedance_base, config.electrode_impedance_variance, rng
        )

    def add_noise(self, clean_signal: float) -> float:
        """Return the signal with one sample of every noise source added."""
        return (
            clean_signal
            + self._thermal.generate_sample()
            + self._powerline.generate_sample(self.powerline_phase)
            + self._electrode.generate_contact_noise()
        )

    def update_powerline_phase(self, sample_rate_hz: int) -> None:
        """Advance the mains phase by one sample period."""
        self.powerline_phase += _TWO_PI * self.config.powerline_frequency_hz / sample_rate_hz
        if self.powerline_phase > _TWO_PI:
            self.powerline_phase -= _TWO_PI