"""Predefined simulation profiles for typical users and recording conditions."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

from ..types import GestureType
from .config import ArtifactConfig, MuscleConfig, NoiseConfig, SimulationConfig


class FiberComposition(Enum):
    ENDURANCE_ATHLETE = "EnduranceAthlete"  # high type I
    POWER_ATHLETE = "PowerAthlete"  # high type II
    BALANCED = "Balanced"  # mixed composition
    ELDERLY = "Elderly"  # reduced type II


class StrengthLevel(Enum):
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"
    ATHLETE = "Athlete"


class FatigueResistance(Enum):
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"


class EnvironmentType(Enum):
    CLINICAL = "Clinical"  # low interference
    HOME = "Home"  # moderate interference
    INDUSTRIAL = "Industrial"  # high interference
    MOBILE = "Mobile"  # variable interference


class ElectrodeQuality(Enum):
    RESEARCH = "Research"  # low impedance, stable
    CLINICAL = "Clinical"
    CONSUMER = "Consumer"
    POOR = "Poor"  # high impedance, unstable


class SignalConditioningQuality(Enum):
    PROFESSIONAL = "Professional"
    STANDARD = "Standard"
    CONSUMER = "Consumer"


@dataclass
class MuscleCharacteristics:
    fiber_composition: FiberComposition
    strength_level: StrengthLevel
    fatigue_resistance: FatigueResistance
    neural_efficiency: float


@dataclass
class NoiseCharacteristics:
    environment_type: EnvironmentType
    electrode_quality: ElectrodeQuality
    signal_conditioning: SignalConditioningQuality


@dataclass
class ActivationProfile:
    onset_time_ms: float
    peak_time_ms: float
    offset_time_ms: float
    amplitude_consistency: float


@dataclass
class GesturePattern:
    gesture_type: GestureType
    activation_profile: ActivationProfile
    variability_factor: float
    success_rate: float


_FATIGUE_RATES = {
    FatigueResistance.LOW: (0.02, 0.03),
    FatigueResistance.NORMAL: (0.01, 0.05),
    FatigueResistance.HIGH: (0.005, 0.08),
}

_MVC_FACTORS = {
    StrengthLevel.LOW: 0.6,
    StrengthLevel.NORMAL: 1.0,
    StrengthLevel.HIGH: 1.3,
    StrengthLevel.ATHLETE: 1.6,
}

# thermal noise dBm, powerline Hz, powerline amplitude factor
_ENVIRONMENT_NOISE = {
    EnvironmentType.CLINICAL: (-65.0, 50.0, 0.01),
    EnvironmentType.HOME: (-60.0, 50.0, 0.02),
    EnvironmentType.INDUSTRIAL: (-55.0, 50.0, 0.05),
    EnvironmentType.MOBILE: (-58.0, 50.0, 0.03),
}

_ELECTRODE_IMPEDANCE = {
    ElectrodeQuality.RESEARCH: (2000.0, 200.0),
    ElectrodeQuality.CLINICAL: (5000.0, 1000.0),
    ElectrodeQuality.CONSUMER: (8000.0, 2000.0),
    ElectrodeQuality.POOR: (15000.0, 5000.0),
}

_MOTION_PROBABILITY = {
    EnvironmentType.CLINICAL: 0.005,
    EnvironmentType.HOME: 0.015,
    EnvironmentType.INDUSTRIAL: 0.030,
    EnvironmentType.MOBILE: 0.040,
}


def _standard_gesture_library() -> list[GesturePattern]:
    return [
        GesturePattern(
            GestureType.HAND_CLOSE, ActivationProfile(80.0, 200.0, 150.0, 0.9), 0.15, 0.95
        ),
        GesturePattern(
            GestureType.HAND_OPEN, ActivationProfile(120.0, 250.0, 180.0, 0.85), 0.20, 0.92
        ),
        GesturePattern(
            GestureType.WRIST_FLEXION, ActivationProfile(60.0, 180.0, 120.0, 0.88), 0.18, 0.93
        ),
        GesturePattern(
            GestureType.WRIST_EXTENSION, ActivationProfile(70.0, 190.0, 130.0, 0.86), 0.22, 0.90
        ),
    ]


def _amputee_gesture_library() -> list[GesturePattern]:
    library = _standard_gesture_library()
    for pattern in library:
        pattern.activation_profile.onset_time_ms *= 1.1  # slightly slower
        pattern.variability_factor *= 1.2
        pattern.success_rate *= 0.95
    return library


def _stress_test_gesture_library() -> list[GesturePattern]:
    library = _standard_gesture_library()
    for pattern in library:
        pattern.activation_profile.amplitude_consistency *= 0.7
        pattern.variability_factor *= 2.0
        pattern.success_rate *= 0.8
    return library


def _athletic_gesture_library() -> list[GesturePattern]:
    library = _standard_gesture_library()
    for pattern in library:
        pattern.activation_profile.onset_time_ms *= 0.8  # faster response
        pattern.activation_profile.amplitude_consistency *= 1.1
        pattern.variability_factor *= 0.8
        pattern.success_rate = min(pattern.success_rate * 1.05, 0.99)
    return library


@dataclass
class SimulationProfile:
    """A user and environment description that yields a simulation configuration."""

    name: str
    description: str
    muscle_characteristics: MuscleCharacteristics
    noise_characteristics: NoiseCharacteristics
    gesture_library: list[GesturePattern] = field(default_factory=list)

    @classmethod
    def healthy_user(cls) -> "SimulationProfile":
        """Healthy adult in a clinical setting."""
        return cls(
            name="healthy_user",
            description="Healthy adult with normal muscle function in clinical setting",
            muscle_characteristics=MuscleCharacteristics(
                FiberComposition.BALANCED, StrengthLevel.NORMAL, FatigueResistance.NORMAL, 0.85
            ),
            noise_characteristics=NoiseCharacteristics(
                EnvironmentType.CLINICAL,
                ElectrodeQuality.CLINICAL,
                SignalConditioningQuality.STANDARD,
            ),
            gesture_library=_standard_gesture_library(),
        )

    @classmethod
    def amputee_baseline(cls) -> "SimulationProfile":
        """Below-elbow amputee with good residual muscle function."""
        return cls(
            name="amputee_baseline",
            description="Below-elbow amputee with good residual muscle function",
            muscle_characteristics=MuscleCharacteristics(
                FiberComposition.BALANCED, StrengthLevel.NORMAL, FatigueResistance.HIGH, 0.75
            ),
            noise_characteristics=NoiseCharacteristics(
                EnvironmentType.HOME,
                ElectrodeQuality.CONSUMER,
                SignalConditioningQuality.CONSUMER,
            ),
            gesture_library=_amputee_gesture_library(),
        )

    @classmethod
    def stress_test(cls) -> "SimulationProfile":
        """Challenging conditions for stressing the system."""
        return cls(
            name="stress_test",
            description="Challenging conditions for system stress testing",
            muscle_characteristics=MuscleCharacteristics(
                FiberComposition.ELDERLY, StrengthLevel.LOW, FatigueResistance.LOW, 0.60
            ),
            noise_characteristics=NoiseCharacteristics(
                EnvironmentType.INDUSTRIAL,
                ElectrodeQuality.POOR,
                SignalConditioningQuality.CONSUMER,
            ),
            gesture_library=_stress_test_gesture_library(),
        )

    @classmethod
    def athletic_user(cls) -> "SimulationProfile":
        """Athletic user with enhanced control and strength."""
        return cls(
            name="athletic_user",
            description="Athletic user with enhanced muscle control and strength",
            muscle_characteristics=MuscleCharacteristics(
                FiberComposition.POWER_ATHLETE, StrengthLevel.ATHLETE, FatigueResistance.HIGH, 0.95
            ),
            noise_characteristics=NoiseCharacteristics(
                EnvironmentType.CLINICAL,
                ElectrodeQuality.RESEARCH,
                SignalConditioningQuality.PROFESSIONAL,
            ),
            gesture_library=_athletic_gesture_library(),
        )

    def to_simulation_config(self) -> SimulationConfig:
        """Derive a full simulation configuration from this profile."""
        return SimulationConfig(
            profile_name=self.name,
            sample_rate_hz=2000,
            channel_count=8,
            muscle_config=self._muscle_config(),
            noise_config=self._noise_config(),
            artifact_config=self._artifact_config(),
        )

    def _muscle_config(self) -> MuscleConfig:
        muscle = self.muscle_characteristics
        fatigue_rate, recovery_rate = _FATIGUE_RATES[muscle.fatigue_resistance]
        return MuscleConfig(
            fiber_recruitment_curve=muscle.neural_efficiency * 0.4,
            maximum_voluntary_contraction=_MVC_FACTORS[muscle.strength_level],
            fatigue_rate=fatigue_rate,
            recovery_rate=recovery_rate,
        )

    def _noise_config(self) -> NoiseConfig:
        noise = self.noise_characteristics
        thermal, powerline_freq, powerline_amp = _ENVIRONMENT_NOISE[noise.environment_type]
        base_impedance, impedance_var = _ELECTRODE_IMPEDANCE[noise.electrode_quality]
        return NoiseConfig(
            thermal_noise_power_dbm=thermal,
            powerline_frequency_hz=powerline_freq,
            powerline_amplitude_factor=powerline_amp,
            electrode_impedance_base=base_impedance,
            electrode_impedance_variance=impedance_var,
        )

    def _artifact_config(self) -> ArtifactConfig:
        motion_prob = _MOTION_PROBABILITY[self.noise_characteristics.environment_type]
        return ArtifactConfig(
            motion_artifact_probability=motion_prob,
            motion_artifact_amplitude=0.15,
            electrode_pop_probability=0.0005,
            cable_movement_probability=motion_prob * 0.5,
        )

    def copy(self) -> "SimulationProfile":
        """Deep copy of the profile."""
        return dataclasses.replace(
            self,
            muscle_characteristics=dataclasses.replace(self.muscle_characteristics),
            noise_characteristics=dataclasses.replace(self.noise_characteristics),
            gesture_library=[
                dataclasses.replace(p, activation_profile=dataclasses.replace(p.activation_profile))
                for p in self.gesture_library
            ],
        )