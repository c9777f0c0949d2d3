"""Hardware abstraction layer: device interface, USB device, shared types and simulation."""