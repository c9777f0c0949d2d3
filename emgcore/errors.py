"""Unified error types for the EMG system.

Every error raised by the system components derives from :class:`EmgError`.
Each error carries an :class:`ErrorContext` describing where and when it
happened.
"""

from __future__ import annotations

import contextlib
import dataclasses
import inspect
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, Optional


@dataclass(frozen=True)
class DeviceType:
    """Kind of device an error came from; ``unknown`` carries a free-form name."""

    kind: str
    name: Optional[str] = None

    _LABELS = {
        "Simulator": "SIMULATOR",
        "UsbEmg": "USB-EMG",
        "SerialEmg": "SERIAL-EMG",
        "NetworkEmg": "NETWORK-EMG",
        "FileSource": "FILE-SOURCE",
    }

    @classmethod
    def unknown(cls, name: str) -> "DeviceType":
        return cls("Unknown", name)

    def __str__(self) -> str:
        if self.kind == "Unknown":
            return f"UNKNOWN-{self.name}"
        return self._LABELS[self.kind]


DeviceType.SIMULATOR = DeviceType("Simulator")
DeviceType.USB_EMG = DeviceType("UsbEmg")
DeviceType.SERIAL_EMG = DeviceType("SerialEmg")
DeviceType.NETWORK_EMG = DeviceType("NetworkEmg")
DeviceType.FILE_SOURCE = DeviceType("FileSource")


class _NamedEnum(Enum):
    def __str__(self) -> str:
        return self.value


class ProcessingStage(_NamedEnum):
    ACQUISITION = "Acquisition"
    FILTERING = "Filtering"
    AMPLIFICATION = "Amplification"
    DIGITAL_SIGNAL_PROCESSING = "DigitalSignalProcessing"
    FEATURE_EXTRACTION = "FeatureExtraction"
    MACHINE_LEARNING = "MachineLearning"
    OUTPUT = "Output"


class BufferType(_NamedEnum):
    RING_BUFFER = "RingBuffer"
    CIRCULAR_BUFFER = "CircularBuffer"
    LINEAR_BUFFER = "LinearBuffer"
    PACKET_BUFFER = "PacketBuffer"
    SAMPLE_BUFFER = "SampleBuffer"


@dataclass(frozen=True)
class CommunicationProtocol:
    """Communication protocol; ``custom`` carries a free-form name."""

    kind: str
    name: Optional[str] = None

    @classmethod
    def custom(cls, name: str) -> "CommunicationProtocol":
        return cls("Custom", name)

    def __str__(self) -> str:
        if self.kind == "Custom":
            return f'Custom("{self.name}")'
        return self.kind


CommunicationProtocol.SERIAL = CommunicationProtocol("Serial")
CommunicationProtocol.USB = CommunicationProtocol("Usb")
CommunicationProtocol.TCP = CommunicationProtocol("Tcp")
CommunicationProtocol.UDP = CommunicationProtocol("Udp")
CommunicationProtocol.I2C = CommunicationProtocol("I2c")
CommunicationProtocol.SPI = CommunicationProtocol("Spi")


class RealTimeConstraint(_NamedEnum):
    SAMPLE_DEADLINE = "SampleDeadline"
    PROCESSING_LATENCY = "ProcessingLatency"
    BUFFER_UNDERRUN = "BufferUnderrun"
    SYNCHRONIZATION_DRIFT = "SynchronizationDrift"
    INTERRUPT_LATENCY = "InterruptLatency"


class Severity(_NamedEnum):
    LOW = "Low"  # system can continue normally
    MEDIUM = "Medium"  # degraded but functional
    HIGH = "High"  # compromised, immediate attention needed
    CRITICAL = "Critical"  # failure imminent, emergency stop required


class ResourceType(_NamedEnum):
    MEMORY = "Memory"
    FILE_DESCRIPTORS = "FileDescriptors"
    NETWORK_CONNECTIONS = "NetworkConnections"
    THREADS = "Threads"
    CPU_TIME = "CpuTime"
    DISK_SPACE = "DiskSpace"
    BUS_CAPACITY = "BusCapacity"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _thread_name() -> Optional[str]:
    return threading.current_thread().name


@dataclass
class ErrorContext:
    """Where and when an error happened, plus free-form details."""

    component: str
    operation: str
    timestamp: datetime = field(default_factory=_now)
    thread_id: Optional[str] = field(default_factory=_thread_name)
    file: Optional[str] = None
    line: Optional[int] = None
    additional_info: dict[str, str] = field(default_factory=dict)
    chain: list[str] = field(default_factory=list)

    @classmethod
    def with_location(cls, component: str, operation: str, file: str, line: int) -> "ErrorContext":
        return cls(component, operation, file=file, line=line)

    def add_info(self, key: str, value: str) -> "ErrorContext":
        """Return a copy with one more key/value entry."""
        info = dict(self.additional_info)
        info[str(key)] = str(value)
        return dataclasses.replace(self, additional_info=info, chain=list(self.chain))

    def add_to_chain(self, error: str) -> "ErrorContext":
        """Return a copy with ``error`` appended to the chain."""
        return dataclasses.replace(
            self, additional_info=dict(self.additional_info), chain=[*self.chain, error]
        )


def _caller_location(depth: int) -> tuple[str, int]:
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            frame = frame.f_back
        return frame.f_code.co_filename, frame.f_lineno
    finally:
        del frame


def error_context(component: str, operation: str) -> ErrorContext:
    """Build a context carrying the caller's file and line."""
    file, line = _caller_location(1)
    return ErrorContext.with_location(component, operation, file, line)


def _default_context() -> ErrorContext:
    return ErrorContext("unknown", "unknown")


def _debug_option(value: Optional[object]) -> str:
    return "None" if value is None else f"Some({value})"


class EmgError(Exception):
    """Base of every EMG system error."""

    context: ErrorContext


@dataclass(eq=False)
class DeviceError(EmgError):
    device_type: DeviceType
    error: BaseException
    context: ErrorContext = field(default_factory=_default_context)

    def __post_init__(self) -> None:
        self.__cause__ = self.error

    def __str__(self) -> str:
        file = self.context.file if self.context.file is not None else "unknown"
        line = self.context.line if self.context.line is not None else 0
        return (
            f"[{self.device_type}] Device error in {self.context.component}: "
            f"{self.error} (at {file}:{line})"
        )


@dataclass(eq=False)
class ConfigurationError(EmgError):
    component: str
    reason: str
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        return (
            f"[CONFIG] Configuration error in {self.component}: {self.reason} "
            f"({self.context.operation})"
        )


@dataclass(eq=False)
class ProcessingError(EmgError):
    stage: ProcessingStage
    reason: str
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        return f"[PROCESSING] {self.stage} stage error: {self.reason} ({self.context.operation})"


@dataclass(eq=False)
class BufferOverflowError(EmgError):
    buffer_type: BufferType
    capacity: int
    attempted_size: int
    channel: Optional[int] = None
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        where = "" if self.channel is None else f" on channel {self.channel}"
        return (
            f"[BUFFER] {self.buffer_type} overflow{where}: tried to write "
            f"{self.attempted_size} bytes to {self.capacity}-byte buffer "
            f"({self.context.operation})"
        )


@dataclass(eq=False)
class InvalidDataError(EmgError):
    data_type: str
    reason: str
    expected: Optional[str] = None
    actual: Optional[str] = None
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        if self.expected is not None and self.actual is not None:
            return (
                f"[DATA] Invalid {self.data_type}: {self.reason} (expected: "
                f"{self.expected}, got: {self.actual}) ({self.context.operation})"
            )
        return f"[DATA] Invalid {self.data_type}: {self.reason} ({self.context.operation})"


@dataclass(eq=False)
class CommunicationError(EmgError):
    protocol: CommunicationProtocol
    operation: str
    reason: str
    retry_count: int = 0
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        return (
            f"[COMM] {self.protocol} communication error during {self.operation}: "
            f"{self.reason} (retries: {self.retry_count}) ({self.context.operation})"
        )


@dataclass(eq=False)
class TimingError(EmgError):
    reason: str
    expected_timing: Optional[int] = None
    actual_timing: Optional[int] = None
    drift_ns: Optional[int] = None
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        if None not in (self.expected_timing, self.actual_timing, self.drift_ns):
            return (
                f"[TIMING] Timing violation: {self.reason} (expected: "
                f"{self.expected_timing}ns, actual: {self.actual_timing}ns, drift: "
                f"{self.drift_ns}ns) ({self.context.operation})"
            )
        return f"[TIMING] Timing error: {self.reason} ({self.context.operation})"


@dataclass(eq=False)
class MemoryAllocationError(EmgError):
    operation: str
    requested_bytes: Optional[int] = None
    available_bytes: Optional[int] = None
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        if self.requested_bytes is not None and self.available_bytes is not None:
            return (
                f"[MEMORY] Memory error during {self.operation}: requested "
                f"{self.requested_bytes} bytes, {self.available_bytes} available "
                f"({self.context.operation})"
            )
        return f"[MEMORY] Memory error during {self.operation}: {self.context.operation} "


@dataclass(eq=False)
class RealTimeError(EmgError):
    constraint_type: RealTimeConstraint
    severity: Severity
    deadline_ns: Optional[int] = None
    actual_duration_ns: Optional[int] = None
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        return (
            f"[RT-{self.severity}] Real-time constraint violation "
            f"({self.constraint_type}): {_debug_option(self.deadline_ns)} "
            f"({self.context.operation})"
        )


@dataclass(eq=False)
class SecurityError(EmgError):
    operation: str
    reason: str
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        return (
            f"[SECURITY] Security error during {self.operation}: {self.reason} "
            f"({self.context.operation})"
        )


@dataclass(eq=False)
class ResourceExhaustedError(EmgError):
    resource_type: ResourceType
    limit: int
    requested: int
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        return (
            f"[RESOURCE] {self.resource_type} exhausted: requested {self.requested}, "
            f"limit {self.limit} ({self.context.operation})"
        )


@dataclass(eq=False)
class SystemFailureError(EmgError):
    subsystem: str
    reason: str
    error_code: Optional[int] = None
    context: ErrorContext = field(default_factory=_default_context)

    def __str__(self) -> str:
        if self.error_code is not None:
            return (
                f"[SYSTEM] {self.subsystem} error (code: {self.error_code}): "
                f"{self.reason} ({self.context.operation})"
            )
        return f"[SYSTEM] {self.subsystem} error: {self.reason} ({self.context.operation})"


def device_error(device_type: DeviceType, error: BaseException, component: str) -> DeviceError:
    """Wrap a device driver's exception, recording the caller's location."""
    file, line = _caller_location(1)
    context = ErrorContext.with_location(component, "device_operation", file, line)
    return DeviceError(device_type=device_type, error=error, context=context)


@dataclass
class EmgErrorBuilder:
    """Builds errors that share one component and operation."""

    component: str
    operation: str

    def _context(self) -> ErrorContext:
        return ErrorContext(self.component, self.operation)

    def configuration(self, reason: str) -> ConfigurationError:
        return ConfigurationError(component=self.component, reason=reason, context=self._context())

    def processing(self, stage: ProcessingStage, reason: str) -> ProcessingError:
        return ProcessingError(stage=stage, reason=reason, context=self._context())

    def buffer_overflow(
        self, buffer_type: BufferType, capacity: int, attempted_size: int
    ) -> BufferOverflowError:
        return BufferOverflowError(
            buffer_type=buffer_type,
            capacity=capacity,
            attempted_size=attempted_size,
            context=self._context(),
        )

    def invalid_data(self, data_type: str, reason: str) -> InvalidDataError:
        return InvalidDataError(data_type=data_type, reason=reason, context=self._context())

    def communication(
        self, protocol: CommunicationProtocol, reason: str, retry_count: int
    ) -> CommunicationError:
        return CommunicationError(
            protocol=protocol,
            operation=self.operation,
            reason=reason,
            retry_count=retry_count,
            context=self._context(),
        )

    def timing(self, reason: str) -> TimingError:
        return TimingError(reason=reason, context=self._context())

    def real_time(self, constraint_type: RealTimeConstraint, severity: Severity) -> RealTimeError:
        return RealTimeError(
            constraint_type=constraint_type, severity=severity, context=self._context()
        )


@contextlib.contextmanager
def wrap_errors(component: str, operation: str) -> Iterator[None]:
    """Re-raise any exception from the block as a :class:`SystemFailureError`.

    Usable as a ``with`` block or as a decorator.
    """
    try:
        yield
    except Exception as err:
        raise SystemFailureError(
            subsystem=component,
            reason=str(err),
            context=ErrorContext(component, operation),
        ) from err