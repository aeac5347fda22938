"""Power node usage, storage fault and storage status messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..telemetry import TelemetryField, TelemetryMessage


@dataclass
class PowerNodeUsageMsg(TelemetryMessage):
    net_power_w: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [TelemetryField("net_power_w", float(self.net_power_w))]


@dataclass
class PowerStorageFaultMsg(TelemetryMessage):
    """Fraction of the nominal capacity still usable; one means no fault."""

    fault_capacity_ratio: float = 1.0

    def flatten(self) -> List[TelemetryField]:
        return [TelemetryField("fault_capacity_ratio", float(self.fault_capacity_ratio))]


@dataclass
class PowerStorageStatusMsg(TelemetryMessage):
    storage_level_j: float = 0.0
    storage_capacity_j: float = 0.0
    current_net_power_w: float = 0.0

    def flatten(self) -> List[TelemetryField]:
        return [
            TelemetryField("storage_level_j", float(self.storage_level_j)),
            TelemetryField("storage_capacity_j", float(self.storage_capacity_j)),
            TelemetryField("current_net_power_w", float(self.current_net_power_w)),
        ]