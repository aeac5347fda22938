"""GPS receiver with a correlated random-walk error on position and velocity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Tuple

import numpy as np

from ..core import Input, Module, Output, SimulationContext
from ..messages.sensors import GpsMsg
from ..messages.state import SpacecraftStateMsg
from .tam import seed_from_name

_GPS_EPOCH = datetime(1980, 1, 6)
_NANOS_PER_WEEK = 7 * 86_400 * 1_000_000_000

# Dates (UTC) from which GPS time runs ahead of UTC by the given number of seconds.
_GPS_MINUS_UTC = [
    (datetime(1981, 7, 1), 1),
    (datetime(1982, 7, 1), 2),
    (datetime(1983, 7, 1), 3),
    (datetime(1985, 7, 1), 4),
    (datetime(1988, 1, 1), 5),
    (datetime(1990, 1, 1), 6),
    (datetime(1991, 1, 1), 7),
    (datetime(1992, 7, 1), 8),
    (datetime(1993, 7, 1), 9),
    (datetime(1994, 7, 1), 10),
    (datetime(1996, 1, 1), 11),
    (datetime(1997, 7, 1), 12),
    (datetime(1999, 1, 1), 13),
    (datetime(2006, 1, 1), 14),
    (datetime(2009, 1, 1), 15),
    (datetime(2012, 7, 1), 16),
    (datetime(2015, 7, 1), 17),
    (datetime(2017, 1, 1), 18),
]


def _as_naive_utc(epoch: datetime) -> datetime:
    if epoch.tzinfo is None:
        return epoch
    return epoch.astimezone(timezone.utc).replace(tzinfo=None)


def _gps_minus_utc_seconds(utc: datetime) -> int:
    offset = 0
    for start, seconds in _GPS_MINUS_UTC:
        if utc >= start:
            offset = seconds
    return offset


def gps_time_of_week(epoch: datetime) -> Tuple[int, int]:
    """GPS week number and nanoseconds into that week for a UTC epoch.

    A naive datetime is taken to be UTC.
    """
    utc = _as_naive_utc(epoch)
    if utc < _GPS_EPOCH:
        raise ValueError("epoch precedes the start of GPS time")
    elapsed = utc - _GPS_EPOCH
    micros = (elapsed.days * 86_400 + elapsed.seconds) * 1_000_000 + elapsed.microseconds
    total_nanos = micros * 1_000 + _gps_minus_utc_seconds(utc) * 1_000_000_000
    week, nanos_of_week = divmod(total_nanos, _NANOS_PER_WEEK)
    return week, nanos_of_week


def _bounded_walk(error: np.ndarray, bounds: np.ndarray) -> np.ndarray:
    return np.where(bounds > 0.0, np.clip(error, -np.abs(bounds), np.abs(bounds)), error)


@dataclass
class GpsConfig:
    name: str
    p_matrix_sqrt: np.ndarray = field(default_factory=lambda: np.zeros((6, 6)))
    a_matrix: np.ndarray = field(default_factory=lambda: np.zeros((6, 6)))
    walk_bounds: np.ndarray = field(default_factory=lambda: np.zeros(6))
    cross_trans: bool = False


class Gps(Module):
    """Outputs sensed inertial position and velocity together with GPS time."""

    def __init__(self, config: GpsConfig) -> None:
        self.config = config
        self.input_state_msg: Input[SpacecraftStateMsg] = Input(SpacecraftStateMsg)
        self.output_gps_msg: Output[GpsMsg] = Output(GpsMsg())
        self._prev_time_nanos = 0
        self._error_state = np.zeros(6)
        self._rng = np.random.default_rng(seed_from_name(config.name))

    def init(self) -> None:
        self.output_gps_msg.write(GpsMsg())

    def update(self, context: SimulationContext) -> None:
        state = self.input_state_msg.read()
        week, nanos_of_week = gps_time_of_week(context.current_epoch)
        error = self._step_error(context.current_sim_nanos)
        self.output_gps_msg.write(
            GpsMsg(
                position_m=np.asarray(state.position_m, dtype=float) + error[:3],
                velocity_mps=np.asarray(state.velocity_mps, dtype=float) + error[3:],
                gps_week=week,
                gps_seconds_of_week=nanos_of_week * 1.0e-9,
            )
        )
        self._prev_time_nanos = context.current_sim_nanos

    def _step_error(self, current_sim_nanos: int) -> np.ndarray:
        cfg = self.config
        if self._prev_time_nanos == 0:
            dt_seconds = 0.0
        else:
            dt_seconds = (current_sim_nanos - self._prev_time_nanos) * 1.0e-9

        a_matrix = np.array(cfg.a_matrix, dtype=float)
        if cfg.cross_trans:
            for axis in range(3):
                a_matrix[axis, axis + 3] *= dt_seconds

        random_vector = self._rng.standard_normal(6)
        error = a_matrix @ self._error_state + np.asarray(cfg.p_matrix_sqrt, dtype=float) @ random_vector
        self._error_state = _bounded_walk(error, np.asarray(cfg.walk_bounds, dtype=float))
        return self._error_state.copy()