"""Configuration of the EMG signal simulation."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping, Type, TypeVar

_T = TypeVar("_T")


@dataclass
class MuscleConfig:
    """Muscle recruitment and fatigue parameters."""

    fiber_recruitment_curve: float = 0.3
    maximum_voluntary_contraction: float = 1.0
    fatigue_rate: float = 0.01
    recovery_rate: float = 0.05


@dataclass
class NoiseConfig:
    """Thermal, powerline and electrode noise parameters."""

    thermal_noise_power_dbm: float = -60.0
    powerline_frequency_hz: float = 50.0
    powerline_amplitude_factor: float = 0.02
    electrode_impedance_base: float = 5000.0
    electrode_impedance_variance: float = 1000.0


@dataclass
class ArtifactConfig:
    """Probabilities and amplitudes of injected artifacts."""

    motion_artifact_probability: float = 0.02
    motion_artifact_amplitude: float = 0.1
    electrode_pop_probability: float = 0.001
    cable_movement_probability: float = 0.005


def _build(cls: Type[_T], data: Mapping[str, Any], nested: Mapping[str, type] = {}) -> _T:
    if not isinstance(data, Mapping):
        raise ValueError(f"{cls.__name__} expects a mapping, got {type(data).__name__}")
    values = {}
    for f in dataclasses.fields(cls):
        if f.name not in data:
            raise ValueError(f"{cls.__name__}: missing field '{f.name}'")
        value = data[f.name]
        if f.name in nested:
            value = _build(nested[f.name], value)
        values[f.name] = value
    return cls(**values)


@dataclass
class SimulationConfig:
    """Complete description of a simulated device."""

    profile_name: str = "healthy_user"
    sample_rate_hz: int = 2000
    channel_count: int = 8
    muscle_config: MuscleConfig = field(default_factory=MuscleConfig)
    noise_config: NoiseConfig = field(default_factory=NoiseConfig)
    artifact_config: ArtifactConfig = field(default_factory=ArtifactConfig)

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dictionary of every field."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """Build from a nested mapping; every field must be present."""
        return _build(
            cls,
            data,
            {
                "muscle_config": MuscleConfig,
                "noise_config": NoiseConfig,
                "artifact_config": ArtifactConfig,
            },
        )