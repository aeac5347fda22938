"""Environment messages: atmosphere, eclipse, magnetic field, solar flux and sun data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from ..telemetry import TelemetryField, TelemetryMessage, vector_fields


def _zeros3() -> np.ndarray:
    return np.zeros(3)


@dataclass
class AtmosphereMsg(TelemetryMessage):
    neutral_density_kgpm3: float = 0.0
    local_temp_k: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [
            TelemetryField("neutral_density_kgpm3", float(self.neutral_density_kgpm3)),
            TelemetryField("local_temp_k", float(self.local_temp_k)),
        ]


@dataclass
class EclipseMsg(TelemetryMessage):
    illumination_factor: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [TelemetryField("illumination_factor", float(self.illumination_factor))]


@dataclass
class MagneticFieldMsg(TelemetryMessage):
    magnetic_field_inertial_t: np.ndarray = field(default_factory=_zeros3)

    def flatten(self) -> List[TelemetryField]:
        return vector_fields("magnetic_field_inertial_t", self.magnetic_field_inertial_t)


@dataclass
class SolarFluxMsg(TelemetryMessage):
    flux_w_per_m2: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [TelemetryField("flux_w_per_m2", float(self.flux_w_per_m2))]


@dataclass
class SunEphemerisMsg(TelemetryMessage):
    sun_position_inertial_m: np.ndarray = field(default_factory=_zeros3)
    sun_velocity_inertial_mps: np.ndarray = field(default_factory=_zeros3)

    def flatten(self) -> List[TelemetryField]:
        return [
            *vector_fields("sun_position_inertial_m", self.sun_position_inertial_m),
            *vector_fields("sun_velocity_inertial_mps", self.sun_velocity_inertial_mps),
        ]


@dataclass
class SunLineMsg(TelemetryMessage):
    sun_vector_body: np.ndarray = field(default_factory=_zeros3)
    valid: bool = False
    num_active_sensors: int = 0

    def flatten(self) -> List[TelemetryField]:
        return [
            *vector_fields("sun_vector_body", self.sun_vector_body),
            TelemetryField("valid", 1.0 if self.valid else 0.0),
            TelemetryField("num_active_sensors", float(self.num_active_sensors)),
        ]