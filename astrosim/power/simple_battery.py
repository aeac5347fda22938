"""Battery that integrates the net power of its nodes between capacity limits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core import Input, Module, Output, SimulationContext
from ..messages.power import PowerNodeUsageMsg, PowerStorageFaultMsg, PowerStorageStatusMsg


@dataclass
class SimpleBatteryConfig:
    name: str
    storage_capacity_j: float
    stored_charge_init_j: float


class SimpleBattery(Module):
    """Stored charge follows the summed node power, limited by capacity and any fault."""

    def __init__(self, config: SimpleBatteryConfig) -> None:
        self.config = config
        self.power_node_in_msgs: List[Input[PowerNodeUsageMsg]] = []
        self.battery_fault_in_msg: Input[PowerStorageFaultMsg] = Input(PowerStorageFaultMsg)
        self.bat_power_out_msg: Output[PowerStorageStatusMsg] = Output(PowerStorageStatusMsg())
        self.stored_charge_j = config.stored_charge_init_j
        self._previous_time_s = 0.0

    def add_power_node_to_model(self) -> Input[PowerNodeUsageMsg]:
        """Add a power node input and return it for connecting."""
        node = Input(PowerNodeUsageMsg)
        self.power_node_in_msgs.append(node)
        return node

    def current_net_power_w(self) -> float:
        return sum(node.read().net_power_w for node in self.power_node_in_msgs)

    def init(self) -> None:
        if not self.config.storage_capacity_j > 0.0:
            raise ValueError(
                f"simple battery '{self.config.name}' storage_capacity_j must be positive"
            )
        if not self.config.stored_charge_init_j >= 0.0:
            raise ValueError(
                f"simple battery '{self.config.name}' stored_charge_init_j must be non-negative"
            )
        self._previous_time_s = 0.0
        self.stored_charge_j = min(self.config.stored_charge_init_j, self.config.storage_capacity_j)
        self.bat_power_out_msg.write(
            PowerStorageStatusMsg(
                storage_level_j=self.stored_charge_j,
                storage_capacity_j=self.config.storage_capacity_j,
                current_net_power_w=0.0,
            )
        )

    def update(self, context: SimulationContext) -> None:
        if not self.power_node_in_msgs:
            self.bat_power_out_msg.write(PowerStorageStatusMsg())
            return

        current_time_s = context.current_sim_nanos * 1.0e-9
        dt_s = current_time_s - self._previous_time_s
        status = self._evaluate_battery_model(self.current_net_power_w(), dt_s)
        self._previous_time_s = current_time_s
        self.bat_power_out_msg.write(status)

    def _evaluate_battery_model(self, net_power_w: float, dt_s: float) -> PowerStorageStatusMsg:
        capacity = self.config.storage_capacity_j
        charge = self.stored_charge_j + net_power_w * dt_s
        charge = min(max(charge, 0.0), capacity)

        if self.battery_fault_in_msg.is_connected():
            fault_ratio = self.battery_fault_in_msg.read().fault_capacity_ratio
        else:
            fault_ratio = 1.0
        if not 0.0 <= fault_ratio <= 1.0:
            raise ValueError(
                f"simple battery '{self.config.name}' fault_capacity_ratio must be between 0 and 1"
            )

        self.stored_charge_j = min(charge, capacity * fault_ratio)
        return PowerStorageStatusMsg(
            storage_level_j=self.stored_charge_j,
            storage_capacity_j=capacity,
            current_net_power_w=net_power_w,
        )