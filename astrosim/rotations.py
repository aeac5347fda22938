"""Quaternions and modified Rodrigues parameter (MRP) attitude helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


def cross_matrix(vector) -> np.ndarray:
    """Skew-symmetric matrix ``M`` such that ``M @ b == cross(vector, b)``."""
    x, y, z = (float(c) for c in vector)
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion with scalar part ``w`` and vector part ``(x, y, z)``."""

    w: float
    x: float
    y: float
    z: float

    @staticmethod
    def identity() -> "Quaternion":
        return Quaternion(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_euler_angles(roll: float, pitch: float, yaw: float) -> "Quaternion":
        """Rotation about z by yaw, then y by pitch, then x by roll (applied right to left)."""
        sr, cr = math.sin(roll * 0.5), math.cos(roll * 0.5)
        sp, cp = math.sin(pitch * 0.5), math.cos(pitch * 0.5)
        sy, cy = math.sin(yaw * 0.5), math.cos(yaw * 0.5)
        return Quaternion(
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        ).normalized()

    @staticmethod
    def from_scaled_axis(axis_angle) -> "Quaternion":
        """Rotation about ``axis_angle`` by an angle equal to its norm."""
        v = np.asarray(axis_angle, dtype=float)
        angle = float(np.linalg.norm(v))
        if angle == 0.0:
            return Quaternion.identity()
        s = math.sin(angle * 0.5) / angle
        return Quaternion(math.cos(angle * 0.5), v[0] * s, v[1] * s, v[2] * s)

    @staticmethod
    def from_mrp(sigma) -> "Quaternion":
        """Unit quaternion holding the Euler parameters of the MRP set ``sigma``."""
        s = np.asarray(sigma, dtype=float)
        s2 = float(s @ s)
        denom = 1.0 + s2
        vec = 2.0 * s / denom
        return Quaternion((1.0 - s2) / denom, vec[0], vec[1], vec[2]).normalized()

    @property
    def vector(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def normalized(self) -> "Quaternion":
        norm = math.sqrt(self.w**2 + self.x**2 + self.y**2 + self.z**2)
        if norm == 0.0:
            raise ValueError("cannot normalise a zero quaternion")
        return Quaternion(self.w / norm, self.x / norm, self.y / norm, self.z / norm)

    def inverse(self) -> "Quaternion":
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def __mul__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z
        return Quaternion(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        )

    def rotate(self, vector) -> np.ndarray:
        """Apply this rotation to a 3-vector."""
        v = np.asarray(vector, dtype=float)
        qv = self.vector
        t = 2.0 * np.cross(qv, v)
        return v + self.w * t + np.cross(qv, t)

    def to_rotation_matrix(self) -> np.ndarray:
        w, x, y, z = self.w, self.x, self.y, self.z
        return np.array(
            [
                [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
                [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
                [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
            ]
        )


def body_to_inertial_dcm_from_sigma_bn(sigma_bn) -> np.ndarray:
    """Direction cosine matrix mapping body-frame vectors into the inertial frame."""
    s = np.asarray(sigma_bn, dtype=float)
    s2 = float(s @ s)
    tilde = cross_matrix(s)
    correction = (8.0 * tilde @ tilde - 4.0 * (1.0 - s2) * tilde) / (1.0 + s2) ** 2
    return np.eye(3) + correction


def shadow_mrp(sigma_bn) -> np.ndarray:
    """Switch to the shadow set when the MRP norm exceeds one."""
    s = np.asarray(sigma_bn, dtype=float)
    s2 = float(s @ s)
    if s2 > 1.0:
        return -s / s2
    return s.copy()


def mrp_b_matrix(sigma_bn) -> np.ndarray:
    s = np.asarray(sigma_bn, dtype=float)
    s2 = float(s @ s)
    return (1.0 - s2) * np.eye(3) + 2.0 * cross_matrix(s) + 2.0 * np.outer(s, s)


def mrp_kinematics(sigma_bn, omega_radps) -> np.ndarray:
    """Time derivative of the MRP set for body rate ``omega_radps``."""
    return 0.25 * mrp_b_matrix(sigma_bn) @ np.asarray(omega_radps, dtype=float)