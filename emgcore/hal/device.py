"""Core device abstraction: the device interface, sample types and HAL errors."""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence


@dataclass
class QualityMetrics:
    """Signal quality assessment attached to a sample."""

    signal_quality: float
    """Overall signal quality, 0.0 to 1.0."""
    noise_level: float
    artifact_detected: bool
    snr_db: float


@dataclass
class EmgSample:
    """Data from all channels at one instant."""

    timestamp: int
    """Nanoseconds since the Unix epoch."""
    sequence: int
    channel_data: list[float]
    """One value per channel, in volts."""
    quality_metrics: Optional[QualityMetrics] = None


@dataclass
class DeviceCapabilities:
    """Specifications of a device."""

    max_sampling_rate_hz: int
    channel_count: int
    resolution_bits: int
    input_range_mv: float
    supports_differential: bool
    supports_hardware_filters: bool


@dataclass
class DeviceInfo:
    """Identity and capabilities of a device."""

    device_id: str
    device_type: str
    firmware_version: str
    serial_number: str
    capabilities: DeviceCapabilities


@dataclass
class DeviceStatus:
    """Current state of a device."""

    is_connected: bool
    is_streaming: bool
    sample_rate_hz: int
    samples_processed: int
    error_count: int
    last_error: Optional[str] = None


class HalErrorKind(Enum):
    """Kinds of device error; each value is its message template."""

    DEVICE_NOT_FOUND = "Device not found: {}"
    CONNECTION_FAILED = "Connection failed: {}"
    NOT_CONNECTED = "Device is not connected"
    NOT_INITIALIZED = "Device is not initialized"
    CONFIGURATION_ERROR = "Configuration error: {}"
    ACQUISITION_ERROR = "Data acquisition error: {}"
    TIMEOUT = "Timeout: {}"
    HARDWARE_ERROR = "Hardware error: {}"
    PROTOCOL_ERROR = "Protocol error: {}"
    DATA_CORRUPTION = "Data corruption: {}"
    BUFFER_OVERFLOW = "Buffer overflow"
    INVALID_PARAMETER = "Invalid parameter: {}"
    NOT_SUPPORTED = "Operation not supported: {}"

    @property
    def takes_detail(self) -> bool:
        return "{}" in self.value


class HalError(Exception):
    """Error raised by a device."""

    def __init__(self, kind: HalErrorKind, detail: Optional[str] = None) -> None:
        if kind.takes_detail and detail is None:
            raise ValueError(f"{kind.name} requires a detail message")
        self.kind = kind
        self.detail = detail if kind.takes_detail else None
        super().__init__(str(self))

    def __str__(self) -> str:
        return self.kind.value.format(self.detail)

    def __repr__(self) -> str:
        return f"HalError({self.kind.name}, {self.detail!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HalError):
            return NotImplemented
        return self.kind is other.kind and self.detail == other.detail

    def __hash__(self) -> int:
        return hash((self.kind, self.detail))


class EmgDevice(abc.ABC):
    """Interface every EMG device implements."""

    @abc.abstractmethod
    async def initialize(self) -> None:
        """Prepare the device for use."""

    @abc.abstractmethod
    async def connect(self) -> None:
        """Open the connection to the device."""

    @abc.abstractmethod
    async def disconnect(self) -> None:
        """Close the connection to the device."""

    @abc.abstractmethod
    async def start_acquisition(self) -> None:
        """Begin streaming data."""

    @abc.abstractmethod
    async def stop_acquisition(self) -> None:
        """Stop streaming data."""

    @abc.abstractmethod
    async def read_sample(self) -> EmgSample:
        """Read one sample from all channels."""

    @property
    @abc.abstractmethod
    def channel_count(self) -> int:
        """Number of channels."""

    @property
    @abc.abstractmethod
    def sampling_rate(self) -> int:
        """Current sampling rate in Hz."""

    @abc.abstractmethod
    async def get_device_info(self) -> DeviceInfo:
        """Describe the device."""

    @abc.abstractmethod
    async def get_status(self) -> DeviceStatus:
        """Report the device's current state."""

    @abc.abstractmethod
    async def configure(self, config: Any) -> None:
        """Apply a new configuration."""


class DeviceFactory:
    """Discovery of available devices."""

    @classmethod
    async def list_devices(cls) -> list[DeviceInfo]:
        """List the devices that are present; none are discovered."""
        return []

    @classmethod
    async def auto_connect(cls) -> EmgDevice:
        """Connect to the first available device."""
        raise HalError(HalErrorKind.DEVICE_NOT_FOUND, "No devices found")


def adc_to_voltage(adc_value: int, resolution_bits: int, reference_voltage: float) -> float:
    """Convert signed ADC counts to volts."""
    max_value = float(1 << (resolution_bits - 1))
    return adc_value / max_value * reference_voltage


def voltage_to_adc(voltage: float, resolution_bits: int, reference_voltage: float) -> int:
    """Convert volts to signed ADC counts, truncating toward zero."""
    max_value = float(1 << (resolution_bits - 1))
    return int(voltage / reference_voltage * max_value)


def calculate_rms(samples: Sequence[float]) -> float:
    """Root mean square of a signal; 0.0 for an empty one."""
    if not samples:
        return 0.0
    return math.sqrt(sum(x * x for x in samples) / len(samples))


def detect_saturation(samples: Sequence[float], threshold: float) -> bool:
    """Whether any sample reaches the threshold in magnitude."""
    return any(abs(x) >= threshold for x in samples)


def calculate_snr_db(signal_power: float, noise_power: float) -> float:
    """Signal-to-noise ratio in dB; infinite when there is no noise."""
    if noise_power <= 0.0:
        return math.inf
    ratio = signal_power / noise_power
    if ratio == 0.0:
        return -math.inf
    if ratio < 0.0:
        return math.nan
    return 10.0 * math.log10(ratio)