"""Core value types shared by the simulation layer: samples, device details, gestures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class QualityMetrics:
    """Signal quality indicators for one sample."""

    snr_db: float = 0.0
    contact_impedance_kohm: list[float] = field(default_factory=list)
    artifact_detected: bool = False
    signal_saturation: bool = False


@dataclass
class EmgSample:
    """One EMG sample with its metadata."""

    timestamp: int
    sequence: int
    channels: list[float]
    quality_indicators: QualityMetrics = field(default_factory=QualityMetrics)


@dataclass
class DeviceCapabilities:
    """What a device can do."""

    max_channels: int = 8
    max_sample_rate_hz: int = 4000
    has_builtin_filters: bool = False
    supports_impedance_check: bool = False
    supports_calibration: bool = False


@dataclass
class DeviceInfo:
    """Identity and capabilities of a device."""

    name: str
    version: str
    serial_number: str
    capabilities: DeviceCapabilities = field(default_factory=DeviceCapabilities)


class DeviceType(Enum):
    """How a device is connected; values are the serialized names."""

    SIMULATOR = "Simulator"
    USB = "Usb"
    SERIAL = "Serial"
    BLUETOOTH = "Bluetooth"


class ThreadPriority(Enum):
    """Thread priority levels; values are the serialized names."""

    NORMAL = "Normal"
    HIGH = "High"
    REAL_TIME = "realtime"


_GESTURE_NAMES = {
    "HandClose": "Hand Close",
    "HandOpen": "Hand Open",
    "WristFlexion": "Wrist Flexion",
    "WristExtension": "Wrist Extension",
    "WristPronation": "Wrist Pronation",
    "WristSupination": "Wrist Supination",
    "IndexPoint": "Index Point",
    "ThumbUp": "Thumb Up",
    "Rest": "Rest",
    "CoContraction": "Co-contraction",
}


class GestureType(Enum):
    """Hand and wrist gestures; values are the serialized names."""

    HAND_CLOSE = "HandClose"
    HAND_OPEN = "HandOpen"
    WRIST_FLEXION = "WristFlexion"
    WRIST_EXTENSION = "WristExtension"
    WRIST_PRONATION = "WristPronation"
    WRIST_SUPINATION = "WristSupination"
    INDEX_POINT = "IndexPoint"
    THUMB_UP = "ThumbUp"
    REST = "Rest"
    CO_CONTRACTION = "CoContraction"

    def __str__(self) -> str:
        return _GESTURE_NAMES[self.value]


@dataclass
class SimulationMetadata:
    """State of the simulation when a sample was produced."""

    profile_name: str
    artifacts_present: bool
    fatigue_levels: list[float]
    """Per-channel fatigue, 0.0 to 1.0."""
    clean_snr_db: float
    """SNR before artifact injection."""


@dataclass
class SimulatedEmgSample:
    """A sample together with the ground truth that produced it."""

    base_sample: EmgSample
    ground_truth_gesture: GestureType
    activation_level: float
    simulation_metadata: SimulationMetadata