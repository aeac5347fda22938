"""Star tracker reporting the inertial-to-sensor attitude with a random-walk error."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from ..core import Input, Module, Output, SimulationContext
from ..messages.sensors import StarTrackerMsg
from ..messages.state import SpacecraftStateMsg
from ..rotations import Quaternion
from .tam import seed_from_name


@dataclass
class StarTrackerConfig:
    name: str
    body_to_sensor_quaternion: Quaternion = field(default_factory=Quaternion.identity)
    p_matrix_sqrt_rad: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))
    a_matrix: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))
    walk_bounds_rad: np.ndarray = field(default_factory=lambda: np.zeros(3))


class StarTracker(Module):
    """Outputs the sensed attitude; the error is a principal rotation vector."""

    def __init__(self, config: StarTrackerConfig) -> None:
        self.config = config
        self.input_state_msg: Input[SpacecraftStateMsg] = Input(SpacecraftStateMsg)
        self.output_star_tracker_msg: Output[StarTrackerMsg] = Output(StarTrackerMsg())
        self._error_state_prv_rad = np.zeros(3)
        self._rng = np.random.default_rng(seed_from_name(config.name))

    def init(self) -> None:
        self.output_star_tracker_msg.write(StarTrackerMsg())

    def update(self, context: SimulationContext) -> None:
        state = self.input_state_msg.read()
        true_attitude = self.config.body_to_sensor_quaternion * state.inertial_to_body()
        self.output_star_tracker_msg.write(
            StarTrackerMsg(attitude_inertial_to_sensor=self._apply_errors(true_attitude))
        )

    def _apply_errors(self, true_attitude: Quaternion) -> Quaternion:
        cfg = self.config
        random_vector = self._rng.standard_normal(3)
        error = (
            np.asarray(cfg.a_matrix, dtype=float) @ self._error_state_prv_rad
            + np.asarray(cfg.p_matrix_sqrt_rad, dtype=float) @ random_vector
        )
        bounds = np.asarray(cfg.walk_bounds_rad, dtype=float)
        self._error_state_prv_rad = np.where(
            bounds > 0.0, np.clip(error, -np.abs(bounds), np.abs(bounds)), error
        )
        return Quaternion.from_scaled_axis(self._error_state_prv_rad) * true_attitude