from datetime import datetime, timezone

import numpy as np
import pytest

from astrosim.core import Output, SimulationContext
from astrosim.messages.state import SpacecraftStateMsg
from astrosim.rotations import Quaternion
from astrosim.sensors.imu import Imu, ImuConfig


def _context():
    return SimulationContext(0, datetime(2025, 1, 1, tzinfo=timezone.utc))


def _run_imu(imu, omega):
    state_out = Output(SpacecraftStateMsg(omega_radps=np.asarray(omega, dtype=float)))
    imu.input_state_msg.connect(state_out)
    imu.init()
    imu.update(_context())
    return imu.output_imu_msg.read().angular_rate_sensor_radps


def _imu(quaternion=None, noise=(0.0, 0.0, 0.0)):
    return Imu(
        ImuConfig(
            name="imu",
            position_m=np.zeros(3),
            body_to_sensor_quaternion=quaternion or Quaternion.identity(),
            rate_noise_std_radps=np.array(noise, dtype=float),
        )
    )


def test_identity_rotation_passes_through_omega():
    omega = np.array([0.0, 0.15, 0.1])
    out = _run_imu(_imu(), omega)
    assert np.linalg.norm(out - omega) < 1e-12


def test_known_rotation_transforms_omega():
    omega_body = np.array([0.0, 0.15, 0.1])
    q = Quaternion.from_euler_angles(0.1, 1.0, 0.7854)
    expected = q.to_rotation_matrix() @ omega_body
    out = _run_imu(_imu(q), omega_body)
    assert np.linalg.norm(out - expected) < 1e-12


def test_init_writes_zero_rate():
    imu = _imu()
    imu.init()
    assert np.array_equal(imu.output_imu_msg.read().angular_rate_sensor_radps, np.zeros(3))


def test_unconnected_input_reads_zero_rate():
    imu = _imu()
    imu.init()
    imu.update(_context())
    assert np.array_equal(imu.output_imu_msg.read().angular_rate_sensor_radps, np.zeros(3))


def test_noise_is_reproducible_between_instances():
    omega = np.array([0.01, 0.02, 0.03])
    first = _run_imu(_imu(noise=(0.01, 0.01, 0.01)), omega)
    second = _run_imu(_imu(noise=(0.01, 0.01, 0.01)), omega)
    assert np.array_equal(first, second)
    assert np.linalg.norm(first - omega) > 0.0


def test_noise_only_on_axes_with_nonzero_std():
    omega = np.array([0.01, 0.02, 0.03])
    out = _run_imu(_imu(noise=(0.0, 0.05, 0.0)), omega)
    assert out[0] == omega[0]
    assert out[2] == omega[2]
    assert out[1] != omega[1]


def test_negative_noise_std_rejected():
    imu = _imu(noise=(-0.1, 0.0, 0.0))
    imu.init()
    with pytest.raises(ValueError):
        imu.update(_context())