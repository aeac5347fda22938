"""Sensor output messages: GPS, IMU, star tracker, sun sensor and magnetometer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from ..rotations import Quaternion
from ..telemetry import TelemetryField, TelemetryMessage, vector_fields


def _zeros3() -> np.ndarray:
    return np.zeros(3)


@dataclass
class GpsMsg(TelemetryMessage):
    position_m: np.ndarray = field(default_factory=_zeros3)
    velocity_mps: np.ndarray = field(default_factory=_zeros3)
    gps_week: int = 0
    gps_seconds_of_week: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [
            *vector_fields("position_m", self.position_m),
            *vector_fields("velocity_mps", self.velocity_mps),
            TelemetryField("gps_week", float(self.gps_week)),
            TelemetryField("gps_seconds_of_week", float(self.gps_seconds_of_week)),
        ]


@dataclass
class ImuMsg(TelemetryMessage):
    angular_rate_sensor_radps: np.ndarray = field(default_factory=_zeros3)

    def flatten(self) -> List[TelemetryField]:
        return vector_fields("angular_rate_sensor_radps", self.angular_rate_sensor_radps)


@dataclass
class StarTrackerMsg(TelemetryMessage):
    attitude_inertial_to_sensor: Quaternion = field(default_factory=Quaternion.identity)

    def flatten(self) -> List[TelemetryField]:
        q = self.attitude_inertial_to_sensor
        return [
            TelemetryField("attitude_inertial_to_sensor.x", float(q.x)),
            TelemetryField("attitude_inertial_to_sensor.y", float(q.y)),
            TelemetryField("attitude_inertial_to_sensor.z", float(q.z)),
            TelemetryField("attitude_inertial_to_sensor.w", float(q.w)),
        ]


@dataclass
class SunSensorMsg(TelemetryMessage):
    sensed_value: float = 0.0
    true_value: float = 0.0
    valid: bool = False

    def flatten(self) -> List[TelemetryField]:
        return [
            TelemetryField("sensed_value", float(self.sensed_value)),
            TelemetryField("true_value", float(self.true_value)),
            TelemetryField("valid", 1.0 if self.valid else 0.0),
        ]


@dataclass
class TamMsg(TelemetryMessage):
    magnetic_field_sensor_t: np.ndarray = field(default_factory=_zeros3)

    def flatten(self) -> List[TelemetryField]:
        return vector_fields("magnetic_field_sensor_t", self.magnetic_field_sensor_t)