import math

import pytest

from emgcore.hal.device import (
    DeviceCapabilities,
    DeviceFactory,
    DeviceInfo,
    DeviceStatus,
    EmgDevice,
    EmgSample,
    HalError,
    HalErrorKind,
    QualityMetrics,
    adc_to_voltage,
    calculate_rms,
    calculate_snr_db,
    detect_saturation,
    voltage_to_adc,
)


def test_emg_sample_creation():
    sample = EmgSample(
        timestamp=1000000000,
        sequence=1,
        channel_data=[0.001, -0.002, 0.0015, -0.0008],
        quality_metrics=QualityMetrics(
            signal_quality=0.95,
            noise_level=0.01,
            artifact_detected=False,
            snr_db=40.0,
        ),
    )
    assert len(sample.channel_data) == 4
    assert sample.quality_metrics is not None
    assert sample.quality_metrics.snr_db == 40.0


def test_device_info_creation():
    info = DeviceInfo(
        device_id="test_device",
        device_type="Test Device",
        firmware_version="1.0.0",
        serial_number="TEST123",
        capabilities=DeviceCapabilities(
            max_sampling_rate_hz=10000,
            channel_count=8,
            resolution_bits=24,
            input_range_mv=10.0,
            supports_differential=True,
            supports_hardware_filters=False,
        ),
    )
    assert info.device_id == "test_device"
    assert info.capabilities.channel_count == 8


def test_adc_conversion():
    voltage = adc_to_voltage(1000, 16, 3.3)
    assert abs(voltage - 0.1) < 0.01
    adc = voltage_to_adc(0.1, 16, 3.3)
    assert abs(adc - 1000) < 10


def test_adc_round_trip_is_close():
    for counts in (-32768, -1200, 0, 7, 32767):
        back = voltage_to_adc(adc_to_voltage(counts, 16, 3.3), 16, 3.3)
        assert abs(back - counts) <= 1


def test_rms_calculation():
    assert abs(calculate_rms([1.0, -1.0, 1.0, -1.0]) - 1.0) < 0.001
    assert calculate_rms([]) == 0.0


def test_saturation_detection():
    assert not detect_saturation([0.1, -0.2, 0.15, -0.05], 0.9)
    assert detect_saturation([0.1, -0.2, 0.95, -0.05], 0.9)


def test_saturation_counts_negative_values():
    assert detect_saturation([-0.9], 0.9)


def test_snr_calculation():
    assert abs(calculate_snr_db(1.0, 0.1) - 10.0) < 0.1
    assert math.isinf(calculate_snr_db(1.0, 0.0))


def test_snr_of_silent_signal_is_negative_infinity():
    assert calculate_snr_db(0.0, 1.0) == -math.inf


def test_hal_error_display():
    error = HalError(HalErrorKind.DEVICE_NOT_FOUND, "USB123")
    text = str(error)
    assert "Device not found" in text
    assert "USB123" in text


def test_hal_error_without_detail():
    assert str(HalError(HalErrorKind.NOT_CONNECTED)) == "Device is not connected"
    assert str(HalError(HalErrorKind.BUFFER_OVERFLOW)) == "Buffer overflow"


def test_hal_error_requires_detail_where_template_needs_one():
    with pytest.raises(ValueError):
        HalError(HalErrorKind.TIMEOUT)


def test_hal_error_equality():
    assert HalError(HalErrorKind.TIMEOUT, "x") == HalError(HalErrorKind.TIMEOUT, "x")
    assert not HalError(HalErrorKind.TIMEOUT, "x") == HalError(HalErrorKind.TIMEOUT, "y")


@pytest.mark.asyncio
async def test_list_devices_is_empty():
    assert await DeviceFactory.list_devices() == []


@pytest.mark.asyncio
async def test_auto_connect_finds_nothing():
    with pytest.raises(HalError) as info:
        await DeviceFactory.auto_connect()
    assert info.value.kind is HalErrorKind.DEVICE_NOT_FOUND
    assert "No devices found" in str(info.value)


def test_interface_cannot_be_instantiated():
    with pytest.raises(TypeError):
        EmgDevice()


class _ConstantDevice(EmgDevice):
    def __init__(self):
        self.connected = False
        self.sequence = 0

    async def initialize(self):
        self.sequence = 0

    async def connect(self):
        self.connected = True

    async def disconnect(self):
        self.connected = False

    async def start_acquisition(self):
        if not self.connected:
            raise HalError(HalErrorKind.NOT_CONNECTED)

    async def stop_acquisition(self):
        pass

    async def read_sample(self):
        self.sequence += 1
        return EmgSample(timestamp=self.sequence, sequence=self.sequence, channel_data=[0.5, 0.5])

    @property
    def channel_count(self):
        return 2

    @property
    def sampling_rate(self):
        return 1000

    async def get_device_info(self):
        return DeviceInfo("c", "Constant", "1", "SN-PLACEHOLDER",
                          DeviceCapabilities(1000, 2, 16, 5.0, False, False))

    async def get_status(self):
        return DeviceStatus(self.connected, False, 1000, self.sequence, 0)

    async def configure(self, config):
        pass


@pytest.mark.asyncio
async def test_concrete_device_follows_interface():
    device = _ConstantDevice()
    with pytest.raises(HalError, match="Device is not connected"):
        await device.start_acquisition()
    await device.connect()
    await device.start_acquisition()
    sample = await device.read_sample()
    assert sample == EmgSample(timestamp=1, sequence=1, channel_data=[0.5, 0.5])
    assert calculate_rms(sample.channel_data) == pytest.approx(0.5)
    assert len(sample.channel_data) == device.channel_count
    status = await device.get_status()
    assert status == DeviceStatus(True, False, 1000, 1, 0)