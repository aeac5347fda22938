"""Spacecraft state, mass property, diagnostic and planet state messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from ..rotations import Quaternion
from ..telemetry import TelemetryField, TelemetryMessage, vector_fields


def _zeros3() -> np.ndarray:
    return np.zeros(3)


def _zeros33() -> np.ndarray:
    return np.zeros((3, 3))


def _matrix_fields(prefix: str, matrix) -> List[TelemetryField]:
    """Fields ``prefix.m11`` to ``prefix.m33`` of a 3x3 matrix, row by row."""
    m = np.asarray(matrix, dtype=float)
    return [
        TelemetryField(f"{prefix}.m{row + 1}{col + 1}", float(m[row, col]))
        for row in range(3)
        for col in range(3)
    ]


@dataclass
class SpacecraftStateMsg(TelemetryMessage):
    position_m: np.ndarray = field(default_factory=_zeros3)
    velocity_mps: np.ndarray = field(default_factory=_zeros3)
    sigma_bn: np.ndarray = field(default_factory=_zeros3)
    omega_radps: np.ndarray = field(default_factory=_zeros3)

    def body_to_inertial(self) -> Quaternion:
        """Rotation taking body-frame vectors into the inertial frame."""
        return Quaternion.from_mrp(self.sigma_bn).inverse()

    def inertial_to_body(self) -> Quaternion:
        """Rotation taking inertial-frame vectors into the body frame."""
        return self.body_to_inertial().inverse()

    def flatten(self) -> List[TelemetryField]:
        return [
            *vector_fields("position_m", self.position_m),
            *vector_fields("velocity_mps", self.velocity_mps),
            *vector_fields("sigma_bn", self.sigma_bn),
            *vector_fields("omega_radps", self.omega_radps),
        ]


@dataclass
class SpacecraftMassPropsMsg(TelemetryMessage):
    mass_kg: float = 0.0
    center_of_mass_body_m: np.ndarray = field(default_factory=_zeros3)
    inertia_about_point_b_body_kg_m2: np.ndarray = field(default_factory=_zeros33)

    def flatten(self) -> List[TelemetryField]:
        return [
            TelemetryField("mass_kg", float(self.mass_kg)),
            *vector_fields("center_of_mass_body_m", self.center_of_mass_body_m),
            *_matrix_fields(
                "inertia_about_point_b_body_kg_m2", self.inertia_about_point_b_body_kg_m2
            ),
        ]


@dataclass
class SpacecraftDiagnosticsMsg(TelemetryMessage):
    omega_dot_radps2: np.ndarray = field(default_factory=_zeros3)
    non_conservative_accel_body_mps2: np.ndarray = field(default_factory=_zeros3)
    orbital_kinetic_energy_j: float = 0.0
    rotational_energy_j: float = 0.0
    orbital_angular_momentum_inertial_kg_m2ps: np.ndarray = field(default_factory=_zeros3)
    rotational_angular_momentum_inertial_kg_m2ps: np.ndarray = field(default_factory=_zeros3)

    def flatten(self) -> List[TelemetryField]:
        return [
            *vector_fields("omega_dot_radps2", self.omega_dot_radps2),
            *vector_fields(
                "non_conservative_accel_body_mps2", self.non_conservative_accel_body_mps2
            ),
            TelemetryField("orbital_kinetic_energy_j", float(self.orbital_kinetic_energy_j)),
            TelemetryField("rotational_energy_j", float(self.rotational_energy_j)),
            *vector_fields(
                "orbital_angular_momentum_inertial_kg_m2ps",
                self.orbital_angular_momentum_inertial_kg_m2ps,
            ),
            *vector_fields(
                "rotational_angular_momentum_inertial_kg_m2ps",
                self.rotational_angular_momentum_inertial_kg_m2ps,
            ),
        ]


@dataclass
class PlanetStateMsg(TelemetryMessage):
    position_inertial_m: np.ndarray = field(default_factory=_zeros3)
    velocity_inertial_mps: np.ndarray = field(default_factory=_zeros3)
    has_orientation: bool = False
    inertial_to_fixed: np.ndarray = field(default_factory=_zeros33)
    inertial_to_fixed_dot: np.ndarray = field(default_factory=_zeros33)

    def flatten(self) -> List[TelemetryField]:
        return [
            *vector_fields("position_inertial_m", self.position_inertial_m),
            *vector_fields("velocity_inertial_mps", self.velocity_inertial_mps),
            TelemetryField("has_orientation", 1.0 if self.has_orientation else 0.0),
        ]