"""Simulation context, the module interface and message slots that connect modules."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SimulationContext:
    """Time information handed to every module update."""

    current_sim_nanos: int
    current_epoch: datetime


class Module(ABC):
    """A component that the simulation initialises once and then updates on a schedule."""

    @abstractmethod
    def init(self) -> None:
        """Reset the module and write its initial outputs."""

    @abstractmethod
    def update(self, context: SimulationContext) -> None:
        """Advance the module to the time given by ``context``."""


class Output(Generic[T]):
    """A message slot written by one module and read by any number of inputs."""

    def __init__(self, initial: T) -> None:
        self._value = initial

    def write(self, value: T) -> None:
        """Replace the message held by this slot."""
        self._value = value

    def read(self) -> T:
        """Return a copy of the current message."""
        return copy.deepcopy(self._value)


class Input(Generic[T]):
    """A reader of an :class:`Output`; yields a default message while unconnected."""

    def __init__(self, default_factory: Callable[[], T]) -> None:
        self._default_factory = default_factory
        self._source: Optional[Output[T]] = None

    def is_connected(self) -> bool:
        """Whether an output has been attached."""
        return self._source is not None

    def connect(self, output: Output[T]) -> None:
        """Read from ``output`` from now on."""
        self._source = output

    def read(self) -> T:
        """Return the connected output's message, or a fresh default message."""
        if self._source is None:
            return self._default_factory()
        return self._source.read()