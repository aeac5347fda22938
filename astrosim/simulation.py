"""Fixed-step scheduler that initialises modules and updates them in priority order."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from tqdm import tqdm

from .core import Input, Module, Output, SimulationContext


@dataclass(frozen=True)
class ModuleTiming:
    """How often a module ran and how much wall-clock time its updates took."""

    name: str
    priority: int
    num_updates: int
    total_update_nanos: int


@dataclass
class _ScheduledModule:
    name: str
    priority: int
    period_nanos: int
    insertion_order: int
    module: Module
    next_run_nanos: int = 0
    num_updates: int = 0
    total_update_nanos: int = 0

    def is_due(self, current_nanos: int, is_final_tick: bool) -> bool:
        # On the final tick a module that is part-way through its period also fires,
        # so a stop time that is not a multiple of the period still gets a last step.
        if self.next_run_nanos == current_nanos:
            return True
        return (
            is_final_tick
            and self.next_run_nanos > current_nanos
            and self.next_run_nanos - self.period_nanos < current_nanos
        )


class Simulation:
    """Runs registered modules on their periods, lowest priority value first."""

    def __init__(self, start_epoch: datetime, show_progress: bool = False) -> None:
        self._start_epoch = start_epoch
        self._current_sim_nanos = 0
        self._initialized = False
        self._show_progress = show_progress
        self._collect_timings = False
        self._modules: List[_ScheduledModule] = []
        self._next_insertion_order = 0

    def set_timing_enabled(self, enabled: bool) -> None:
        """Measure the wall-clock time spent in each module's updates."""
        self._collect_timings = enabled

    def add_module(self, name: str, module: Module, period_nanos: int, priority: int) -> None:
        """Schedule ``module`` every ``period_nanos``; ties in priority keep insertion order."""
        self._modules.append(
            _ScheduledModule(
                name=str(name),
                priority=priority,
                period_nanos=period_nanos,
                insertion_order=self._next_insertion_order,
                module=module,
            )
        )
        self._next_insertion_order += 1

    def connect(self, output: Output, input_: Input) -> None:
        """Make ``input_`` read what ``output`` holds."""
        input_.connect(output)

    def initialize(self) -> None:
        """Sort the modules and call their ``init``; does nothing the second time."""
        if self._initialized:
            return
        self._modules.sort(key=lambda scheduled: (scheduled.priority, scheduled.insertion_order))
        for scheduled in self._modules:
            scheduled.module.init()
            scheduled.next_run_nanos = 0
        self._initialized = True

    def run_for(self, duration_nanos: int) -> None:
        """Advance simulated time by ``duration_nanos``, updating modules as they fall due."""
        if duration_nanos < 0:
            raise ValueError("duration_nanos must be non-negative")
        self.initialize()

        start_nanos = self._current_sim_nanos
        stop_nanos = start_nanos + duration_nanos
        progress = (
            tqdm(total=duration_nanos, desc="simulation", unit="ns")
            if self._show_progress
            else None
        )

        try:
            while True:
                context = self.context()
                current = self._current_sim_nanos
                is_final_tick = current == stop_nanos

                for scheduled in self._modules:
                    if not scheduled.is_due(current, is_final_tick):
                        continue
                    started_at = time.perf_counter_ns()
                    scheduled.module.update(context)
                    if self._collect_timings:
                        scheduled.total_update_nanos += time.perf_counter_ns() - started_at
                    scheduled.num_updates += 1
                    scheduled.next_run_nanos += scheduled.period_nanos

                if is_final_tick:
                    _set_progress(progress, duration_nanos)
                    break

                if not self._modules:
                    raise RuntimeError("simulation has no modules")
                next_nanos = min(scheduled.next_run_nanos for scheduled in self._modules)
                target = min(next_nanos, stop_nanos)
                _set_progress(progress, target - start_nanos)
                self._current_sim_nanos = target
        finally:
            if progress is not None:
                progress.set_description("simulation complete")
                progress.close()

    def current_sim_nanos(self) -> int:
        return self._current_sim_nanos

    def current_epoch(self) -> datetime:
        return self._start_epoch + timedelta(microseconds=self._current_sim_nanos / 1_000)

    def start_epoch(self) -> datetime:
        return self._start_epoch

    def context(self) -> SimulationContext:
        return SimulationContext(
            current_sim_nanos=self._current_sim_nanos,
            current_epoch=self.current_epoch(),
        )

    def module_names(self) -> List[str]:
        """Module names in scheduling order (after initialisation)."""
        return [scheduled.name for scheduled in self._modules]

    def module_timings(self) -> List[ModuleTiming]:
        """Per-module timings, the most expensive first."""
        timings = [
            ModuleTiming(
                name=scheduled.name,
                priority=scheduled.priority,
                num_updates=scheduled.num_updates,
                total_update_nanos=scheduled.total_update_nanos,
            )
            for scheduled in self._modules
        ]
        timings.sort(key=lambda timing: timing.total_update_nanos, reverse=True)
        return timings


def _set_progress(progress: Optional[tqdm], position: int) -> None:
    if progress is not None:
        progress.update(position - progress.n)