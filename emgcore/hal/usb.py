"""USB EMG device with a stand-in connection and fixed-layout packet parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

_CHANNELS = 8
_BYTES_PER_CHANNEL = 4
_PACKET_SIZE = _CHANNELS * _BYTES_PER_CHANNEL


@dataclass
class UsbDeviceConfig:
    """USB connection parameters."""

    vendor_id: int = 0x1234
    product_id: int = 0x5678
    interface_number: int = 0
    timeout_ms: int = 1000
    buffer_size: int = 1024


class UsbErrorKind(Enum):
    """Kinds of USB error; each value is its message template."""

    DEVICE_NOT_FOUND = "USB device not found"
    CONNECTION_FAILED = "Connection failed: {}"
    READ_ERROR = "Read error: {}"
    CONFIGURATION_ERROR = "Configuration error: {}"


class UsbError(Exception):
    """Error raised by the USB device."""

    def __init__(self, kind: UsbErrorKind, detail: Optional[str] = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        return self.kind.value.format(self.detail)


@dataclass(frozen=True)
class _UsbHandle:
    vendor_id: int
    product_id: int


class UsbEmgDevice:
    """EMG device reached over USB."""

    def __init__(self, config: Optional[UsbDeviceConfig] = None) -> None:
        self.config = config if config is not None else UsbDeviceConfig()
        self._handle: Optional[_UsbHandle] = None

    @classmethod
    def with_default_config(cls) -> "UsbEmgDevice":
        return cls(UsbDeviceConfig())

    @property
    def is_connected(self) -> bool:
        return self._handle is not None

    def connect(self) -> None:
        """Open a handle to the configured vendor and product."""
        self._handle = _UsbHandle(self.config.vendor_id, self.config.product_id)

    def read_raw_data(self) -> bytes:
        """Read one raw packet from the device."""
        if not self.is_connected:
            raise UsbError(UsbErrorKind.READ_ERROR, "Device not connected")
        return bytes(_PACKET_SIZE)

    def parse_emg_data(self, raw_data: bytes) -> list[float]:
        """Turn a raw packet into eight channel values in [-1, 1)."""
        if len(raw_data) < _PACKET_SIZE:
            raise UsbError(UsbErrorKind.READ_ERROR, "Insufficient data")
        return [
            (raw_data[offset] - 128.0) / 128.0
            for offset in range(0, _PACKET_SIZE, _BYTES_PER_CHANNEL)
        ]