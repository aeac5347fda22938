"""Spacecraft simulation building blocks: message slots, scheduler, sensors, battery and telemetry."""

__version__ = "0.1.0"