"""Guidance, reference and actuator command messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from ..telemetry import TelemetryField, TelemetryMessage, vector_fields


def _zeros3() -> np.ndarray:
    return np.zeros(3)


@dataclass
class AttitudeGuidanceMsg(TelemetryMessage):
    sigma_br: np.ndarray = field(default_factory=_zeros3)
    omega_br_b_radps: np.ndarray = field(default_factory=_zeros3)
    omega_rn_b_radps: np.ndarray = field(default_factory=_zeros3)
    domega_rn_b_radps2: np.ndarray = field(default_factory=_zeros3)

    def flatten(self) -> List[TelemetryField]:
        return [
            *vector_fields("sigma_br", self.sigma_br),
            *vector_fields("omega_br_b_radps", self.omega_br_b_radps),
            *vector_fields("omega_rn_b_radps", self.omega_rn_b_radps),
            *vector_fields("domega_rn_b_radps2", self.domega_rn_b_radps2),
        ]


@dataclass
class AttitudeReferenceMsg(TelemetryMessage):
    sigma_bn: np.ndarray = field(default_factory=_zeros3)
    omega_bn_n_radps: np.ndarray = field(default_factory=_zeros3)

    def flatten(self) -> List[TelemetryField]:
        return [
            *vector_fields("sigma_bn", self.sigma_bn),
            *vector_fields("omega_bn_n_radps", self.omega_bn_n_radps),
        ]


@dataclass
class BodyTorqueCommandMsg(TelemetryMessage):
    torque_request_body_nm: np.ndarray = field(default_factory=_zeros3)

    def flatten(self) -> List[TelemetryField]:
        return vector_fields("torque_request_body_nm", self.torque_request_body_nm)


@dataclass
class TranslationReferenceMsg(TelemetryMessage):
    position_m: np.ndarray = field(default_factory=_zeros3)
    velocity_mps: np.ndarray = field(default_factory=_zeros3)

    def flatten(self) -> List[TelemetryField]:
        return [
            *vector_fields("position_m", self.position_m),
            *vector_fields("velocity_mps", self.velocity_mps),
        ]


@dataclass
class ArrayMotorTorqueMsg(TelemetryMessage):
    motor_torque_nm: List[float] = field(default_factory=list)

    def first_torque_nm(self) -> float:
        """Torque of the first motor, or zero if there are none."""
        return self.motor_torque_nm[0] if self.motor_torque_nm else 0.0

    def flatten(self) -> List[TelemetryField]:
        return [
            TelemetryField(f"motor_torque_nm.{index}", float(value))
            for index, value in enumerate(self.motor_torque_nm)
        ]


@dataclass
class ReactionWheelCommandMsg(TelemetryMessage):
    motor_torque_nm: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [TelemetryField("motor_torque_nm", self.motor_torque_nm)]


@dataclass
class ThrusterCommandMsg(TelemetryMessage):
    on_time_s: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [TelemetryField("on_time_s", self.on_time_s)]


@dataclass
class MtbCommandMsg(TelemetryMessage):
    dipole_cmd_am2: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [TelemetryField("dipole_cmd_am2", self.dipole_cmd_am2)]


@dataclass
class HingedRigidBodyMsg(TelemetryMessage):
    theta_rad: float = 0.0
    theta_dot_radps: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [
            TelemetryField("theta_rad", self.theta_rad),
            TelemetryField("theta_dot_radps", self.theta_dot_radps),
        ]