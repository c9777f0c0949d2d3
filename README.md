# emgcore

Building blocks for EMG (electromyography) based prosthetic control. The
package has no dependencies outside the standard library.

- `emgcore.errors` holds a single error hierarchy. `EmgError` is the base, and
  its subclasses are `DeviceError`, `ConfigurationError`, `ProcessingError`,
  `BufferOverflowError`, `InvalidDataError`, `CommunicationError`,
  `TimingError`, `MemoryAllocationError`, `RealTimeError`, `SecurityError`,
  `ResourceExhaustedError` and `SystemFailureError`. Each error carries an
  `ErrorContext`, which records the component, operation, timestamp, thread
  name, an optional file and line, extra key/value information and a chain of
  messages. `EmgErrorBuilder` builds errors that share a component and an
  operation. `error_context` and `device_error` record the caller's file and
  line.
- `emgcore.hal.device` defines the asynchronous `EmgDevice` abstract interface
  and the data types `EmgSample`, `QualityMetrics`, `DeviceInfo`,
  `DeviceCapabilities` and `DeviceStatus`. It also has `HalError` with
  `HalErrorKind`, `DeviceFactory`, and the signal helpers `adc_to_voltage`,
  `voltage_to_adc`, `calculate_rms`, `detect_saturation` and
  `calculate_snr_db`.
- `emgcore.hal.usb` provides `UsbEmgDevice`, a synchronous USB device with a
  stand-in transport. `read_raw_data` returns a 32-byte packet of zeros.
  `parse_emg_data` turns a 32-byte packet into eight channel values.
- `emgcore.hal.types` holds the value types used by the simulation:
  `EmgSample`, `QualityMetrics`, `GestureType`, `DeviceType`,
  `ThreadPriority`, `SimulatedEmgSample` and others.
- `emgcore.hal.simulation` simulates EMG. It models muscle activation and
  fatigue (`muscle_model`), thermal, powerline and electrode noise
  (`noise_models`), and motion, electrode, cable and baseline-drift artifacts
  (`artifact_injection`). It also has ready-made user profiles (`profiles`),
  the configuration (`config`) and the sample generator (`signal_generator`).

## Installation

```
pip install emgcore
```

Install the test extra to run the test suite:

```
pip install "emgcore[test]"
pytest
```

## Generating simulated EMG

```python
import random

from emgcore.hal.simulation.profiles import SimulationProfile
from emgcore.hal.simulation.signal_generator import EmgSignalGenerator
from emgcore.hal.types import GestureType

config = SimulationProfile.athletic_user().to_simulation_config()
generator = EmgSignalGenerator(config, rng=random.Random(42))

sample = generator.generate_sample(GestureType.HAND_CLOSE, 0.8)
print(sample.sequence, sample.channels)
print(sample.quality_indicators.snr_db, sample.quality_indicators.artifact_detected)
```

The `rng` argument is optional. If you pass a seeded `random.Random`, the
channel values can be reproduced. Sample timestamps are in microseconds since
the Unix epoch, and sequence numbers start at 0.

The available profiles are `healthy_user`, `amputee_baseline`, `stress_test`
and `athletic_user`. You can also build a `SimulationConfig` yourself from
`MuscleConfig`, `NoiseConfig` and `ArtifactConfig`, and save or load it as a
plain dictionary with `to_dict` and `from_dict`. `from_dict` raises
`ValueError` when a field is missing.

## Errors

```python
from emgcore.errors import EmgErrorBuilder, ProcessingStage, wrap_errors

raise EmgErrorBuilder("filter", "design").processing(
    ProcessingStage.FILTERING, "cutoff above Nyquist"
)
```

`wrap_errors(component, operation)` is a context manager. It re-raises any
exception from its block as a `SystemFailureError`. The new error takes the
original message as its `reason`, and the original exception is kept as its
cause.

## What the package does not do

- It does not talk to real hardware. `DeviceFactory.list_devices()` returns an
  empty list. `DeviceFactory.auto_connect()` always raises `HalError` with
  `HalErrorKind.DEVICE_NOT_FOUND`. `UsbEmgDevice` only opens a stand-in handle
  and does not implement the `EmgDevice` interface.
- No ready-made class implements `EmgDevice`. To stream samples through that
  interface, subclass it yourself, for example around `EmgSignalGenerator`.
- There is no command-line program, server or storage. Everything is used as a
  library.