from datetime import datetime, timezone

import pytest

from astrosim.core import Output, SimulationContext
from astrosim.messages.power import PowerNodeUsageMsg, PowerStorageFaultMsg
from astrosim.power.simple_battery import SimpleBattery, SimpleBatteryConfig

STEP_NANOS = 100_000_000


def _context(nanos):
    return SimulationContext(nanos, datetime(2025, 1, 1, tzinfo=timezone.utc))


def _battery(stored_charge_init_j, storage_capacity_j):
    return SimpleBattery(
        SimpleBatteryConfig(
            name="simpleBattery",
            storage_capacity_j=storage_capacity_j,
            stored_charge_init_j=stored_charge_init_j,
        )
    )


def test_storage_limits_match_reference_unit_test():
    power_1 = Output(PowerNodeUsageMsg(net_power_w=5.0))
    power_2 = Output(PowerNodeUsageMsg(net_power_w=5.0))
    battery = _battery(5.0, 10.0)
    battery.add_power_node_to_model().connect(power_1)
    battery.add_power_node_to_model().connect(power_2)

    battery.init()
    for step in range(51):
        battery.update(_context(step * STEP_NANOS))
        status = battery.bat_power_out_msg.read()
        assert abs(status.current_net_power_w - 10.0) < 1.0e-12
        assert status.storage_level_j <= status.storage_capacity_j
        assert status.storage_level_j >= 0.0

    status = battery.bat_power_out_msg.read()
    assert abs(status.storage_level_j - 10.0) < 1.0e-8
    assert abs(status.storage_capacity_j - 10.0) < 1.0e-12


def test_no_power_nodes_writes_zero_status():
    battery = _battery(5.0, 10.0)
    battery.init()
    battery.update(_context(STEP_NANOS))
    status = battery.bat_power_out_msg.read()
    assert status.storage_level_j == 0.0
    assert status.storage_capacity_j == 0.0
    assert status.current_net_power_w == 0.0


@pytest.mark.parametrize(
    "stored_charge_init_j, net_power_1_w, net_power_2_w, capacity_j, fault_ratio",
    [
        (5.0, 5.0, 5.0, 10.0, 0.3),
        (1.0, 1.0, 5.0, 10.0, 0.3),
        (5.0, 5.0, 5.0, 10.0, 0.0),
        (5.0, 5.0, 5.0, 10.0, 1.0),
        (5.0, 5.0, 5.0, 10.0, 1.0e-3),
        (5.0, -5.0, 5.0, 10.0, 0.5),
    ],
)
def test_fault_capacity_ratio_limits_stored_charge(
    stored_charge_init_j, net_power_1_w, net_power_2_w, capacity_j, fault_ratio
):
    power_1 = Output(PowerNodeUsageMsg(net_power_w=net_power_1_w))
    power_2 = Output(PowerNodeUsageMsg(net_power_w=net_power_2_w))
    fault = Output(PowerStorageFaultMsg(fault_capacity_ratio=fault_ratio))
    battery = _battery(stored_charge_init_j, capacity_j)
    battery.add_power_node_to_model().connect(power_1)
    battery.add_power_node_to_model().connect(power_2)
    battery.battery_fault_in_msg.connect(fault)

    battery.init()
    for step in range(51):
        battery.update(_context(step * STEP_NANOS))
        status = battery.bat_power_out_msg.read()
        assert abs(status.storage_capacity_j - capacity_j) < 1.0e-12
        assert status.storage_level_j <= capacity_j * fault_ratio + 1.0e-12
        assert status.storage_level_j >= 0.0


def test_init_writes_initial_charge():
    battery = _battery(4.0, 10.0)
    battery.init()
    status = battery.bat_power_out_msg.read()
    assert status.storage_level_j == 4.0
    assert status.storage_capacity_j == 10.0
    assert status.current_net_power_w == 0.0


def test_initial_charge_capped_at_capacity():
    battery = _battery(20.0, 10.0)
    battery.init()
    assert battery.stored_charge_j == 10.0


def test_current_net_power_sums_nodes():
    battery = _battery(5.0, 10.0)
    battery.add_power_node_to_model().connect(Output(PowerNodeUsageMsg(net_power_w=2.5)))
    battery.add_power_node_to_model().connect(Output(PowerNodeUsageMsg(net_power_w=-1.5)))
    battery.add_power_node_to_model()
    assert battery.current_net_power_w() == pytest.approx(2.5 + -1.5)


def test_discharge_never_goes_negative():
    battery = _battery(1.0, 10.0)
    battery.add_power_node_to_model().connect(Output(PowerNodeUsageMsg(net_power_w=-50.0)))
    battery.init()
    for step in range(20):
        battery.update(_context(step * STEP_NANOS))
    assert battery.bat_power_out_msg.read().storage_level_j == 0.0


def test_invalid_capacity_rejected():
    with pytest.raises(ValueError):
        _battery(0.0, 0.0).init()


def test_negative_initial_charge_rejected():
    with pytest.raises(ValueError):
        _battery(-1.0, 10.0).init()


def test_fault_ratio_out_of_range_rejected():
    battery = _battery(5.0, 10.0)
    battery.add_power_node_to_model().connect(Output(PowerNodeUsageMsg(net_power_w=1.0)))
    battery.battery_fault_in_msg.connect(Output(PowerStorageFaultMsg(fault_capacity_ratio=1.5)))
    battery.init()
    with pytest.raises(ValueError):
        battery.update(_context(STEP_NANOS))