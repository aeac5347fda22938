"""Three-axis magnetometer with bias, random-walk error, scale factor and saturation."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

import numpy as np

from ..core import Input, Module, Output, SimulationContext
from ..messages.environment import MagneticFieldMsg
from ..messages.sensors import TamMsg
from ..messages.state import SpacecraftStateMsg
from ..rotations import Quaternion


def seed_from_name(name: str) -> int:
    """Stable 64-bit seed derived from a sensor name."""
    digest = hashlib.blake2b(name.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "little")


def _bounded_walk(error: np.ndarray, bounds: np.ndarray) -> np.ndarray:
    limit = np.abs(bounds)
    return np.where(bounds > 0.0, np.clip(error, -limit, limit), error)


@dataclass
class TamConfig:
    name: str
    body_to_sensor_quaternion: Quaternion
    bias_t: np.ndarray
    p_matrix_sqrt_t: np.ndarray
    a_matrix: np.ndarray
    walk_bounds_t: np.ndarray
    scale_factor: float
    min_output_t: float
    max_output_t: float


class Tam(Module):
    """Outputs the sensed magnetic field in the sensor frame, in tesla."""

    def __init__(self, config: TamConfig) -> None:
        self.config = config
        self.input_state_msg: Input[SpacecraftStateMsg] = Input(SpacecraftStateMsg)
        self.input_magnetic_field_msg: Input[MagneticFieldMsg] = Input(MagneticFieldMsg)
        self.output_tam_msg: Output[TamMsg] = Output(TamMsg())
        self._error_state_t = np.zeros(3)
        self._rng = np.random.default_rng(seed_from_name(config.name))

    def init(self) -> None:
        self.output_tam_msg.write(TamMsg())

    def update(self, context: SimulationContext) -> None:
        state = self.input_state_msg.read()
        magnetic_field = self.input_magnetic_field_msg.read()
        field_body = state.inertial_to_body().rotate(magnetic_field.magnetic_field_inertial_t)
        true_field = self.config.body_to_sensor_quaternion.rotate(field_body)
        self.output_tam_msg.write(TamMsg(magnetic_field_sensor_t=self._apply_errors(true_field)))

    def _apply_errors(self, true_field: np.ndarray) -> np.ndarray:
        cfg = self.config
        random_vector = self._rng.standard_normal(3)
        error = (
            np.asarray(cfg.a_matrix, dtype=float) @ self._error_state_t
            + np.asarray(cfg.p_matrix_sqrt_t, dtype=float) @ random_vector
        )
        self._error_state_t = _bounded_walk(error, np.asarray(cfg.walk_bounds_t, dtype=float))

        sensed = (
            true_field + self._error_state_t + np.asarray(cfg.bias_t, dtype=float)
        ) * cfg.scale_factor
        if not cfg.min_output_t <= cfg.max_output_t:
            raise ValueError(
                f"magnetometer '{cfg.name}' min_output_t must not exceed max_output_t"
            )
        return np.clip(sensed, cfg.min_output_t, cfg.max_output_t)