"""EMG device abstraction, unified errors and realistic EMG signal simulation."""

__version__ = "0.1.0"