"""Flattening of messages into named fields and recorders that log them to disk."""

from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Generic, List, TypeVar

from .core import Input, Module, SimulationContext

T = TypeVar("T", bound="TelemetryMessage")


@dataclass(frozen=True)
class TelemetryField:
    path: str
    value: float


@dataclass(frozen=True)
class RecordedSample:
    sim_time_nanos: int
    topic: str
    fields: List[TelemetryField] = field(default_factory=list)

    def to_json(self) -> str:
        """Compact JSON form, with non-finite values written as null."""

        def encode(value: float):
            return value if math.isfinite(value) else None

        payload = {
            "sim_time_nanos": self.sim_time_nanos,
            "topic": self.topic,
            "fields": [{"path": f.path, "value": encode(f.value)} for f in self.fields],
        }
        return json.dumps(payload, separators=(",", ":"))


class TelemetryMessage(ABC):
    """A message that can be reduced to a flat list of named numbers."""

    @abstractmethod
    def flatten(self) -> List[TelemetryField]:
        """Return the message's fields in a fixed order."""


def vector_fields(prefix: str, vector) -> List[TelemetryField]:
    """Fields ``prefix.x``, ``prefix.y`` and ``prefix.z`` of a 3-vector."""
    return [
        TelemetryField(f"{prefix}.{axis}", float(vector[index]))
        for index, axis in enumerate("xyz")
    ]


@dataclass
class RecorderConfig:
    topic: str
    output_path: Path


class Recorder(Module, Generic[T]):
    """Appends one JSON line per update with the flattened input message."""

    def __init__(self, config: RecorderConfig, default_factory: Callable[[], T]) -> None:
        self.config = config
        self.input_msg: Input[T] = Input(default_factory)

    def init(self) -> None:
        Path(self.config.output_path).parent.mkdir(parents=True, exist_ok=True)

    def update(self, context: SimulationContext) -> None:
        sample = RecordedSample(
            sim_time_nanos=context.current_sim_nanos,
            topic=self.config.topic,
            fields=self.input_msg.read().flatten(),
        )
        with open(self.config.output_path, "a", encoding="utf-8") as handle:
            handle.write(sample.to_json())
            handle.write("\n")


@dataclass
class CsvRecorderConfig:
    topic: str
    output_path: Path


def _format_value(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return f"{value:.12f}"


class CsvRecorder(Module, Generic[T]):
    """Appends one CSV row per update; the columns are fixed by the first message."""

    def __init__(self, config: CsvRecorderConfig, default_factory: Callable[[], T]) -> None:
        self.config = config
        self.input_msg: Input[T] = Input(default_factory)
        self._header_paths: List[str] = []
        self._header_written = False

    def init(self) -> None:
        Path(self.config.output_path).parent.mkdir(parents=True, exist_ok=True)

    def update(self, context: SimulationContext) -> None:
        fields = self.input_msg.read().flatten()
        with open(self.config.output_path, "a", encoding="utf-8") as handle:
            if not self._header_written:
                self._header_paths = [f.path for f in fields]
                handle.write(",".join(["sim_time_nanos", "sim_time_s", *self._header_paths]))
                handle.write("\n")
                self._header_written = True

            values = {}
            for f in fields:
                values.setdefault(f.path, f.value)
            nanos = context.current_sim_nanos
            cells = [str(nanos), f"{nanos * 1.0e-9:.9f}"]
            cells.extend(_format_value(values.get(path, 0.0)) for path in self._header_paths)
            handle.write(",".join(cells))
            handle.write("\n")