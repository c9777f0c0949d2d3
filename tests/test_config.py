import json

import pytest

from emgcore.hal.simulation.config import (
    ArtifactConfig,
    MuscleConfig,
    NoiseConfig,
    SimulationConfig,
)


def test_simulation_defaults():
    config = SimulationConfig()
    assert config.profile_name == "healthy_user"
    assert config.sample_rate_hz == 2000
    assert config.channel_count == 8
    assert config.muscle_config == MuscleConfig()
    assert config.noise_config == NoiseConfig()
    assert config.artifact_config == ArtifactConfig()


def test_noise_defaults():
    noise = NoiseConfig()
    assert noise.thermal_noise_power_dbm == -60.0
    assert noise.powerline_frequency_hz == 50.0
    assert noise.electrode_impedance_base == 5000.0
    assert noise.electrode_impedance_variance == 1000.0


def test_artifact_and_muscle_defaults():
    assert ArtifactConfig().motion_artifact_probability == 0.02
    assert ArtifactConfig().electrode_pop_probability == 0.001
    assert MuscleConfig().fiber_recruitment_curve == 0.3
    assert MuscleConfig().recovery_rate == 0.05


def test_nested_defaults_are_independent():
    first = SimulationConfig()
    second = SimulationConfig()
    first.noise_config.powerline_frequency_hz = 60.0
    assert second.noise_config.powerline_frequency_hz == 50.0


def test_dict_round_trip():
    config = SimulationConfig(
        profile_name="custom",
        sample_rate_hz=1000,
        channel_count=4,
        noise_config=NoiseConfig(powerline_frequency_hz=60.0),
    )
    assert SimulationConfig.from_dict(config.to_dict()) == config


def test_json_round_trip():
    config = SimulationConfig()
    restored = SimulationConfig.from_dict(json.loads(json.dumps(config.to_dict())))
    assert restored == config
    assert isinstance(restored.artifact_config, ArtifactConfig)


def test_to_dict_is_nested_plain_data():
    data = SimulationConfig().to_dict()
    assert data["muscle_config"]["maximum_voluntary_contraction"] == 1.0
    assert data["artifact_config"]["cable_movement_probability"] == 0.005


def test_missing_top_level_field_rejected():
    data = SimulationConfig().to_dict()
    del data["channel_count"]
    with pytest.raises(ValueError, match="channel_count"):
        SimulationConfig.from_dict(data)


def test_missing_nested_field_rejected():
    data = SimulationConfig().to_dict()
    del data["noise_config"]["powerline_frequency_hz"]
    with pytest.raises(ValueError, match="powerline_frequency_hz"):
        SimulationConfig.from_dict(data)


def test_nested_value_must_be_mapping():
    data = SimulationConfig().to_dict()
    data["muscle_config"] = 5
    with pytest.raises(ValueError):
        SimulationConfig.from_dict(data)