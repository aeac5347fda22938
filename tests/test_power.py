from astrosim.core import Input, Output
from astrosim.messages.power import (
    PowerNodeUsageMsg,
    PowerStorageFaultMsg,
    PowerStorageStatusMsg,
)


def _pairs(msg):
    return [(f.path, f.value) for f in msg.flatten()]


def test_power_node_usage_flatten():
    assert _pairs(PowerNodeUsageMsg(net_power_w=-5.0)) == [("net_power_w", -5.0)]
    assert PowerNodeUsageMsg().net_power_w == 0.0


def test_fault_default_means_full_capacity():
    assert PowerStorageFaultMsg().fault_capacity_ratio == 1.0
    assert _pairs(PowerStorageFaultMsg(fault_capacity_ratio=0.3)) == [
        ("fault_capacity_ratio", 0.3)
    ]


def test_unconnected_fault_input_reads_default():
    fault_in = Input(PowerStorageFaultMsg)
    assert not fault_in.is_connected()
    assert fault_in.read().fault_capacity_ratio == PowerStorageFaultMsg().fault_capacity_ratio


def test_connected_fault_input_reads_written_value():
    fault_out = Output(PowerStorageFaultMsg(fault_capacity_ratio=0.5))
    fault_in = Input(PowerStorageFaultMsg)
    fault_in.connect(fault_out)
    assert fault_in.read().fault_capacity_ratio == 0.5


def test_storage_status_flatten():
    msg = PowerStorageStatusMsg(storage_level_j=7.5, storage_capacity_j=10.0, current_net_power_w=2.0)
    assert _pairs(msg) == [
        ("storage_level_j", 7.5),
        ("storage_capacity_j", 10.0),
        ("current_net_power_w", 2.0),
    ]
    assert all(v == 0.0 for _, v in _pairs(PowerStorageStatusMsg()))