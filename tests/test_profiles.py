import pytest

from emgcore.hal.simulation.profiles import (
    ElectrodeQuality,
    EnvironmentType,
    FatigueResistance,
    FiberComposition,
    SimulationProfile,
    StrengthLevel,
)
from emgcore.hal.types import GestureType


def test_profile_names():
    assert SimulationProfile.healthy_user().name == "healthy_user"
    assert SimulationProfile.amputee_baseline().name == "amputee_baseline"
    assert SimulationProfile.stress_test().name == "stress_test"
    assert SimulationProfile.athletic_user().name == "athletic_user"


def test_healthy_user_characteristics():
    profile = SimulationProfile.healthy_user()
    assert profile.muscle_characteristics.fiber_composition is FiberComposition.BALANCED
    assert profile.muscle_characteristics.strength_level is StrengthLevel.NORMAL
    assert profile.muscle_characteristics.neural_efficiency == 0.85
    assert profile.noise_characteristics.environment_type is EnvironmentType.CLINICAL


def test_standard_gesture_library_order():
    library = SimulationProfile.healthy_user().gesture_library
    assert [p.gesture_type for p in library] == [
        GestureType.HAND_CLOSE,
        GestureType.HAND_OPEN,
        GestureType.WRIST_FLEXION,
        GestureType.WRIST_EXTENSION,
    ]
    assert library[0].activation_profile.onset_time_ms == 80.0
    assert library[0].success_rate == 0.95


def test_config_shape():
    profiles = [
        SimulationProfile.healthy_user(),
        SimulationProfile.amputee_baseline(),
        SimulationProfile.stress_test(),
        SimulationProfile.athletic_user(),
    ]
    for profile in profiles:
        config = profile.to_simulation_config()
        assert config.profile_name == profile.name
        assert config.sample_rate_hz == 2000
        assert config.channel_count == 8
        assert config.artifact_config.motion_artifact_amplitude == 0.15
        assert config.artifact_config.electrode_pop_probability == 0.0005


def test_recruitment_curve_follows_neural_efficiency():
    expected = {
        "healthy_user": 0.85 * 0.4,
        "amputee_baseline": 0.75 * 0.4,
        "stress_test": 0.60 * 0.4,
        "athletic_user": 0.95 * 0.4,
    }
    profiles = [
        SimulationProfile.healthy_user(),
        SimulationProfile.amputee_baseline(),
        SimulationProfile.stress_test(),
        SimulationProfile.athletic_user(),
    ]
    for profile in profiles:
        config = profile.to_simulation_config()
        assert config.muscle_config.fiber_recruitment_curve == pytest.approx(
            expected[profile.name]
        )


def test_cable_probability_is_half_motion():
    expected_motion = {
        "healthy_user": 0.005,
        "amputee_baseline": 0.015,
        "stress_test": 0.030,
        "athletic_user": 0.005,
    }
    profiles = [
        SimulationProfile.healthy_user(),
        SimulationProfile.amputee_baseline(),
        SimulationProfile.stress_test(),
        SimulationProfile.athletic_user(),
    ]
    for profile in profiles:
        artifacts = profile.to_simulation_config().artifact_config
        assert artifacts.motion_artifact_probability == pytest.approx(
            expected_motion[profile.name]
        )
        assert artifacts.cable_movement_probability == pytest.approx(
            expected_motion[profile.name] / 2
        )


def test_healthy_user_config_values():
    config = SimulationProfile.healthy_user().to_simulation_config()
    assert config.muscle_config.maximum_voluntary_contraction == 1.0
    assert config.muscle_config.fatigue_rate == 0.01
    assert config.muscle_config.recovery_rate == 0.05
    assert config.noise_config.thermal_noise_power_dbm == -65.0
    assert config.noise_config.powerline_frequency_hz == 50.0
    assert config.noise_config.powerline_amplitude_factor == 0.01
    assert config.noise_config.electrode_impedance_base == 5000.0
    assert config.noise_config.electrode_impedance_variance == 1000.0
    assert config.artifact_config.motion_artifact_probability == 0.005


def test_stress_test_config_values():
    profile = SimulationProfile.stress_test()
    assert profile.noise_characteristics.electrode_quality is ElectrodeQuality.POOR
    config = profile.to_simulation_config()
    assert config.muscle_config.maximum_voluntary_contraction == 0.6
    assert (config.muscle_config.fatigue_rate, config.muscle_config.recovery_rate) == (0.02, 0.03)
    assert config.noise_config.thermal_noise_power_dbm == -55.0
    assert config.noise_config.electrode_impedance_base == 15000.0
    assert config.artifact_config.motion_artifact_probability == 0.030


def test_athletic_config_values():
    profile = SimulationProfile.athletic_user()
    assert profile.muscle_characteristics.fatigue_resistance is FatigueResistance.HIGH
    config = profile.to_simulation_config()
    assert config.muscle_config.maximum_voluntary_contraction == 1.6
    assert config.muscle_config.recovery_rate == 0.08
    assert config.noise_config.electrode_impedance_base == 2000.0


def test_amputee_library_scaled_from_standard():
    standard = SimulationProfile.healthy_user().gesture_library
    amputee = SimulationProfile.amputee_baseline().gesture_library
    for base, mod in zip(standard, amputee):
        assert mod.activation_profile.onset_time_ms == pytest.approx(
            base.activation_profile.onset_time_ms * 1.1
        )
        assert mod.variability_factor == pytest.approx(base.variability_factor * 1.2)
        assert mod.success_rate < base.success_rate


def test_stress_library_less_consistent():
    standard = SimulationProfile.healthy_user().gesture_library
    stress = SimulationProfile.stress_test().gesture_library
    for base, mod in zip(standard, stress):
        assert mod.activation_profile.amplitude_consistency == pytest.approx(
            base.activation_profile.amplitude_consistency * 0.7
        )
        assert mod.variability_factor == pytest.approx(base.variability_factor * 2.0)


def test_athletic_success_rate_capped():
    library = SimulationProfile.athletic_user().gesture_library
    assert all(p.success_rate <= 0.99 for p in library)
    assert library[0].success_rate == 0.99


def test_factories_return_independent_libraries():
    first = SimulationProfile.healthy_user()
    first.gesture_library[0].success_rate = 0.1
    assert SimulationProfile.healthy_user().gesture_library[0].success_rate == 0.95


def test_copy_is_deep():
    profile = SimulationProfile.healthy_user()
    clone = profile.copy()
    clone.gesture_library[0].activation_profile.onset_time_ms = 1.0
    assert profile.gesture_library[0].activation_profile.onset_time_ms == 80.0
    assert clone.name == profile.name