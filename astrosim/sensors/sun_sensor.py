"""Coarse sun sensor: cosine response with field of view, Kelly fit, distance and eclipse."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from ..core import Input, Module, Output, SimulationContext
from ..messages.environment import EclipseMsg, SunEphemerisMsg
from ..messages.sensors import SunSensorMsg
from ..messages.state import SpacecraftStateMsg
from ..rotations import Quaternion
from .tam import seed_from_name

ASTRONOMICAL_UNIT_M = 149_597_870_700.0


@dataclass
class SunSensorConfig:
    name: str
    position_m: np.ndarray = field(default_factory=lambda: np.zeros(3))
    body_to_sensor_quaternion: Quaternion = field(default_factory=Quaternion.identity)
    fov_half_angle_rad: float = math.pi / 2.0
    scale_factor: float = 1.0
    kelly_factor: float = 0.0
    k_power: float = 2.0
    bias: float = 0.0
    noise_std: float = 0.0
    min_output: float = 0.0
    max_output: float = 1.0e6


def _clamp(value: float, low: float, high: float) -> float:
    if not low <= high:
        raise ValueError("min_output must not exceed max_output")
    return min(max(value, low), high)


class SunSensor(Module):
    """Measures the sun's signal along the sensor boresight (+z of the sensor frame)."""

    def __init__(self, config: SunSensorConfig) -> None:
        self.config = config
        self.input_state_msg: Input[SpacecraftStateMsg] = Input(SpacecraftStateMsg)
        self.input_sun_msg: Input[SunEphemerisMsg] = Input(SunEphemerisMsg)
        self.input_eclipse_msg: Input[EclipseMsg] = Input(EclipseMsg)
        self.output_sun_sensor_msg: Output[SunSensorMsg] = Output(SunSensorMsg())
        self._rng = np.random.default_rng(seed_from_name(config.name))

    def init(self) -> None:
        self.output_sun_sensor_msg.write(SunSensorMsg())

    def update(self, context: SimulationContext) -> None:
        state = self.input_state_msg.read()
        sun = self.input_sun_msg.read()
        if self.input_eclipse_msg.is_connected():
            eclipse = self.input_eclipse_msg.read()
        else:
            eclipse = EclipseMsg(illumination_factor=1.0)
        self.output_sun_sensor_msg.write(self._measure(state, sun, eclipse))

    def _measure(
        self, state: SpacecraftStateMsg, sun: SunEphemerisMsg, eclipse: EclipseMsg
    ) -> SunSensorMsg:
        cfg = self.config
        to_sun = np.asarray(sun.sun_position_inertial_m, dtype=float) - np.asarray(
            state.position_m, dtype=float
        )
        distance_squared = float(to_sun @ to_sun)
        if distance_squared == 0.0:
            return SunSensorMsg()

        direction_body = state.inertial_to_body().rotate(to_sun / math.sqrt(distance_squared))
        raw_signal = float(self._sensor_normal_body() @ direction_body)
        true_value = raw_signal if raw_signal >= math.cos(cfg.fov_half_angle_rad) else 0.0

        if true_value > 0.0:
            if cfg.kelly_factor > 1.0e-10:
                kelly_fit = 1.0 - math.exp(-(true_value**cfg.k_power) / cfg.kelly_factor)
            else:
                kelly_fit = 1.0
            true_value *= kelly_fit
            true_value *= ASTRONOMICAL_UNIT_M * ASTRONOMICAL_UNIT_M / distance_squared
            true_value *= eclipse.illumination_factor

        sensed_value = true_value + cfg.bias + self._gaussian_noise(cfg.noise_std)
        true_value = _clamp(true_value * cfg.scale_factor, cfg.min_output, cfg.max_output)
        sensed_value = _clamp(sensed_value * cfg.scale_factor, cfg.min_output, cfg.max_output)
        return SunSensorMsg(
            sensed_value=sensed_value, true_value=true_value, valid=sensed_value > 0.0
        )

    def _sensor_normal_body(self) -> np.ndarray:
        normal = self.config.body_to_sensor_quaternion.inverse().rotate([0.0, 0.0, 1.0])
        return normal / np.linalg.norm(normal)

    def _gaussian_noise(self, std_dev: float) -> float:
        if std_dev == 0.0:
            return 0.0
        if not (std_dev > 0.0 and math.isfinite(std_dev)):
            raise ValueError("std_dev must be positive")
        return float(self._rng.normal(0.0, std_dev))