from datetime import datetime, timezone

import numpy as np
import pytest

from astrosim.core import Output, SimulationContext
from astrosim.messages.state import SpacecraftStateMsg
from astrosim.sensors.gps import Gps, GpsConfig, gps_time_of_week

EPOCH = datetime(2025, 1, 1)


def zero_noise_config(name="gps"):
    return GpsConfig(
        name=name,
        p_matrix_sqrt=np.zeros((6, 6)),
        a_matrix=np.zeros((6, 6)),
        walk_bounds=np.zeros(6),
        cross_trans=False,
    )


def noisy_config(name):
    return GpsConfig(
        name=name,
        p_matrix_sqrt=np.eye(6),
        a_matrix=np.zeros((6, 6)),
        walk_bounds=np.zeros(6),
        cross_trans=False,
    )


def run_gps(gps, position, velocity, context):
    state_out = Output(
        SpacecraftStateMsg(position_m=np.array(position, dtype=float), velocity_mps=np.array(velocity, dtype=float))
    )
    gps.input_state_msg.connect(state_out)
    gps.init()
    gps.update(context)
    return gps.output_gps_msg.read()


def test_zero_noise_passes_through_position_and_velocity():
    pos = [6_778_000.0, 0.0, 0.0]
    vel = [0.0, 7784.0, 0.0]
    out = run_gps(Gps(zero_noise_config()), pos, vel, SimulationContext(0, EPOCH))
    assert np.linalg.norm(out.position_m - pos) < 1e-12
    assert np.linalg.norm(out.velocity_mps - vel) < 1e-12


def test_gps_time_fields_are_valid():
    out = run_gps(Gps(zero_noise_config()), [0, 0, 0], [0, 0, 0], SimulationContext(0, EPOCH))
    assert out.gps_week > 0
    assert 0.0 <= out.gps_seconds_of_week < 604800.0


def test_different_names_produce_different_noise():
    ctx = SimulationContext(1_000_000_000, EPOCH)
    pos = [6_778_000.0, 0.0, 0.0]
    out_a = run_gps(Gps(noisy_config("gps_a")), pos, [0, 0, 0], ctx)
    out_b = run_gps(Gps(noisy_config("gps_b")), pos, [0, 0, 0], ctx)
    assert not np.array_equal(out_a.position_m, out_b.position_m)


def test_same_name_reproduces_noise():
    ctx = SimulationContext(1_000_000_000, EPOCH)
    out_a = run_gps(Gps(noisy_config("gps_same")), [1, 2, 3], [0, 0, 0], ctx)
    out_b = run_gps(Gps(noisy_config("gps_same")), [1, 2, 3], [0, 0, 0], ctx)
    assert np.array_equal(out_a.position_m, out_b.position_m)
    assert np.array_equal(out_a.velocity_mps, out_b.velocity_mps)


def test_walk_bounds_limit_errors():
    config = noisy_config("bounded")
    config.p_matrix_sqrt = np.eye(6) * 100.0
    config.walk_bounds = np.full(6, 0.5)
    config.a_matrix = np.eye(6)
    gps = Gps(config)
    state_out = Output(SpacecraftStateMsg())
    gps.input_state_msg.connect(state_out)
    gps.init()
    for step in range(1, 20):
        gps.update(SimulationContext(step * 100_000_000, EPOCH))
        out = gps.output_gps_msg.read()
        assert np.all(np.abs(out.position_m) <= 0.5)
        assert np.all(np.abs(out.velocity_mps) <= 0.5)


def test_gps_epoch_is_week_zero():
    assert gps_time_of_week(datetime(1980, 1, 6)) == (0, 0)


def test_time_of_week_for_start_of_2025_includes_leap_seconds():
    week, nanos = gps_time_of_week(EPOCH)
    assert week == 2347
    assert nanos == 259_218 * 1_000_000_000


def test_aware_epoch_matches_naive_utc():
    aware = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert gps_time_of_week(aware) == gps_time_of_week(EPOCH)


def test_epoch_before_gps_time_raises():
    with pytest.raises(ValueError):
        gps_time_of_week(datetime(1979, 12, 31))