"""Injection of motion, electrode, cable and drift artifacts into a signal."""

from __future__ import annotations

import math
import random
from enum import Enum
from typing import Optional

from .config import ArtifactConfig

_TWO_PI = 2.0 * math.pi
_SAMPLE_RATE = 2000.0
_MAX_RANGE = 5.0


class _MotionType(Enum):
    LIMB_MOVEMENT = "LimbMovement"  # large amplitude, low frequency
    MUSCLE_CONTRACTION = "MuscleContraction"  # medium amplitude, medium frequency
    TREMOR = "Tremor"  # small amplitude, high frequency


class _SpikePattern(Enum):
    SINGLE = "Single"  # one large spike
    BURST = "Burst"  # several rapid spikes
    OSCILLATORY = "Oscillatory"  # damped oscillation


_SPIKE_INITIAL_DURATION = {
    _SpikePattern.SINGLE: 40.0,
    _SpikePattern.BURST: 120.0,
    _SpikePattern.OSCILLATORY: 250.0,
}


class _MotionState:
    def __init__(self, rng: random.Random) -> None:
        self._rng = rng
        self.is_active = False
        self.duration_remaining = 0
        self.amplitude = 0.0
        self.frequency_hz = 0.0
        self.phase = 0.0
        self.artifact_type = _MotionType.LIMB_MOVEMENT

    def start(self, config: ArtifactConfig) -> None:
        rng = self._rng
        self.is_active = True

        choice = rng.random()
        if choice < 0.6:
            self.artifact_type = _MotionType.LIMB_MOVEMENT
        elif choice < 0.9:
            self.artifact_type = _MotionType.MUSCLE_CONTRACTION
        else:
            self.artifact_type = _MotionType.TREMOR

        amp = config.motion_artifact_amplitude
        if self.artifact_type is _MotionType.LIMB_MOVEMENT:
            self.duration_remaining = 1000 + rng.randrange(3000)
            self.amplitude = amp * (1.0 + rng.random() * 2.0)
            self.frequency_hz = 0.5 + rng.random() * 3.0
        elif self.artifact_type is _MotionType.MUSCLE_CONTRACTION:
            self.duration_remaining = 200 + rng.randrange(600)
            self.amplitude = amp * (0.3 + rng.random() * 0.7)
            self.frequency_hz = 8.0 + rng.random() * 12.0
        else:
            self.duration_remaining = 2000 + rng.randrange(4000)
            self.amplitude = amp * (0.1 + rng.random() * 0.3)
            self.frequency_hz = 3.0 + rng.random() * 9.0

        self.phase = rng.random() * _TWO_PI

    def generate_sample(self) -> float:
        if self.duration_remaining == 0:
            self.is_active = False
            return 0.0
        self.duration_remaining -= 1

        self.phase += _TWO_PI * self.frequency_hz / _SAMPLE_RATE
        if self.phase > _TWO_PI:
            self.phase -= _TWO_PI

        kind = self.artifact_type
        if kind is _MotionType.LIMB_MOVEMENT:
            progress = 1.0 - self.duration_remaining / 2000.0
            if progress < 0.2:
                envelope = progress / 0.2
            elif progress > 0.8:
                envelope = (1.0 - progress) / 0.2
            else:
                envelope = 1.0
            waveform = math.sin(self.phase)
        elif kind is _MotionType.MUSCLE_CONTRACTION:
            envelope = min(math.exp(self.duration_remaining / 500.0), 1.0)
            waveform = (
                math.sin(self.phase)
                + 0.3 * math.sin(2.0 * self.phase)
                + 0.1 * math.sin(3.0 * self.phase)
            )
        else:
            base = math.sqrt(self.duration_remaining / 3000.0)
            envelope = base * (1.0 + 0.3 * math.sin(self.phase * 0.1))
            waveform = (
                math.sin(self.phase)
                + 0.2 * math.sin(1.7 * self.phase)
                + 0.1 * self._rng.random()
            )

        return waveform * self.amplitude * envelope


class _ElectrodeState:
    def __init__(self) -> None:
        self.pop_countdown = 0
        self.baseline_shift = 0.0
        self.saturation_countdown = 0
        self.impedance_drift = 0.0


class _CableState:
    def __init__(self, rng: random.Random) -> None:
        self._rng = rng
        self.movement_active = False
        self.movement_duration = 0
        self.movement_amplitude = 0.0
        self.spike_pattern = _SpikePattern.SINGLE

    def start(self) -> None:
        rng = self._rng
        self.movement_active = True
        self.movement_amplitude = 0.05 + rng.random() * 0.4

        choice = rng.random()
        if choice < 0.5:
            self.spike_pattern = _SpikePattern.SINGLE
            self.movement_duration = 20 + rng.randrange(30)
        elif choice < 0.8:
            self.spike_pattern = _SpikePattern.BURST
            self.movement_duration = 60 + rng.randrange(80)
        else:
            self.spike_pattern = _SpikePattern.OSCILLATORY
            self.movement_duration = 100 + rng.randrange(200)

    def generate_sample(self) -> float:
        if self.movement_duration == 0:
            self.movement_active = False
            return 0.0

        rng = self._rng
        initial = _SPIKE_INITIAL_DURATION[self.spike_pattern]
        progress = 1.0 - self.movement_duration / initial
        self.movement_duration -= 1

        if self.spike_pattern is _SpikePattern.SINGLE:
            artifact = (rng.random() - 0.5) * math.exp(-progress * 8.0)
        elif self.spike_pattern is _SpikePattern.BURST:
            phase = progress * _TWO_PI * 200.0 * initial / _SAMPLE_RATE
            envelope = math.exp(-progress * 5.0)
            artifact = math.sin(phase) * envelope * (0.5 + 0.5 * rng.random())
        else:
            osc_freq = 50.0 + rng.random() * 100.0
            phase = progress * _TWO_PI * osc_freq * initial / _SAMPLE_RATE
            artifact = math.sin(phase) * math.exp(-progress * 3.0)

        return artifact * self.movement_amplitude


class _BaselineDrift:
    def __init__(self) -> None:
        self.current_drift = 0.0
        self.drift_rate = 0.0
        self.target_drift = 0.0
        self.correction_countdown = 1000


class ArtifactInjector:
    """Adds realistic recording artifacts to a clean signal, one sample at a time."""

    def __init__(self, config: ArtifactConfig, rng: Optional[random.Random] = None) -> None:
        self.config = ArtifactConfig(**vars(config))
        self._rng = rng if rng is not None else random.Random()
        self._last_injection = False
        self._reset()

    def _reset(self) -> None:
        self._motion = _MotionState(self._rng)
        self._electrode = _ElectrodeState()
        self._cable = _CableState(self._rng)
        self._drift = _BaselineDrift()
        self._sample_count = 0

    def maybe_inject_artifact(self, clean_signal: float) -> float:
        """Return the signal with any active artifacts added, soft-clipped to range."""
        self._last_injection = False
        self._sample_count += 1

        signal = clean_signal + self._update_baseline_drift()
        for artifact in (
            self._motion_artifact(),
            self._electrode_artifact(),
            self._cable_artifact(),
        ):
            if artifact is not None:
                signal += artifact
                self._last_injection = True

        return self._condition(signal)

    def last_injection_occurred(self) -> bool:
        """Whether the latest sample carried an episodic artifact."""
        return self._last_injection

    def reset_state(self) -> None:
        """Clear every artifact's state and the sample counter."""
        self._reset()

    def _update_baseline_drift(self) -> float:
        drift = self._drift
        if drift.correction_countdown == 0:
            rng = self._rng
            drift.target_drift = (rng.random() - 0.5) * 0.05
            drift.drift_rate = (drift.target_drift - drift.current_drift) / 5000.0
            drift.correction_countdown = 5000 + rng.randrange(10000)
        drift.current_drift += drift.drift_rate
        drift.correction_countdown -= 1
        return drift.current_drift

    def _motion_artifact(self) -> Optional[float]:
        if not self._motion.is_active:
            if self._rng.random() < self.config.motion_artifact_probability:
                self._motion.start(self.config)
            else:
                return None
        return self._motion.generate_sample()

    def _electrode_artifact(self) -> Optional[float]:
        rng = self._rng
        state = self._electrode
        total = 0.0
        detected = False

        if rng.random() < self.config.electrode_pop_probability:
            state.baseline_shift = (rng.random() - 0.5) * 0.8
            state.pop_countdown = 150 + rng.randrange(100)
            detected = True

        if state.pop_countdown > 0:
            total += state.baseline_shift * math.exp(state.pop_countdown / 200.0)
            state.pop_countdown -= 1
            detected = True

        if rng.random() < 0.0001:
            state.saturation_countdown = 50 + rng.randrange(50)
            detected = True

        if state.saturation_countdown > 0:
            total += 2.0 * (1.0 + 0.5 * (rng.random() - 0.5))
            state.saturation_countdown -= 1
            detected = True

        if self._sample_count % 100 == 0:
            drift = state.impedance_drift + (rng.random() - 0.5) * 0.001
            state.impedance_drift = min(max(drift, -0.02), 0.02)
        total += state.impedance_drift

        if detected or abs(state.impedance_drift) > 0.001:
            return total
        return None

    def _cable_artifact(self) -> Optional[float]:
        if not self._cable.movement_active:
            if self._rng.random() < self.config.cable_movement_probability:
                self._cable.start()
            else:
                return None
        return self._cable.generate_sample()

    @staticmethod
    def _condition(signal: float) -> float:
        magnitude = abs(signal)
        if magnitude > _MAX_RANGE:
            excess = magnitude - _MAX_RANGE
            return math.copysign(_MAX_RANGE + excess / (1.0 + excess), signal)
        return signal