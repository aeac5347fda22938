"""Rate gyro that rotates the body rate into the sensor frame and adds white noise."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from ..core import Input, Module, Output, SimulationContext
from ..messages.sensors import ImuMsg
from ..messages.state import SpacecraftStateMsg
from ..rotations import Quaternion


@dataclass
class ImuConfig:
    name: str
    position_m: np.ndarray = field(default_factory=lambda: np.zeros(3))
    body_to_sensor_quaternion: Quaternion = field(default_factory=Quaternion.identity)
    rate_noise_std_radps: np.ndarray = field(default_factory=lambda: np.zeros(3))


class Imu(Module):
    """Outputs the sensed angular rate; the noise generator is seeded with zero."""

    def __init__(self, config: ImuConfig) -> None:
        self.config = config
        self.input_state_msg: Input[SpacecraftStateMsg] = Input(SpacecraftStateMsg)
        self.output_imu_msg: Output[ImuMsg] = Output(ImuMsg())
        self._rng = np.random.default_rng(0)

    def init(self) -> None:
        self.output_imu_msg.write(ImuMsg())

    def update(self, context: SimulationContext) -> None:
        state = self.input_state_msg.read()
        true_rate = self.config.body_to_sensor_quaternion.rotate(state.omega_radps)
        sensed = np.array(
            [
                rate + self._gaussian_noise(float(std))
                for rate, std in zip(true_rate, self.config.rate_noise_std_radps)
            ]
        )
        self.output_imu_msg.write(ImuMsg(angular_rate_sensor_radps=sensed))

    def _gaussian_noise(self, std_dev: float) -> float:
        if std_dev == 0.0:
            return 0.0
        if not (std_dev > 0.0 and math.isfinite(std_dev)):
            raise ValueError("std_dev must be positive")
        return float(self._rng.normal(0.0, std_dev))