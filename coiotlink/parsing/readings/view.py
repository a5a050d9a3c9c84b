from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from coiotlink.parsing.descriptor.model import Descriptor, SensorCategory, SensorDescription
from coiotlink.parsing.status.model import StatusEntry

UNKNOWN_DEVICE = "Unknown device"


@dataclass(frozen=True)
class Reading:
    """
    A status entry joined with its sensor description.

    Attributes:
        sensor_id: Sensor the value belongs to.
        channel: Channel field of the status entry.
        device: Label of the block(s) the sensor is linked to.
        description: Sensor description from the descriptor.
        category: Sensor category.
        value: The measured value.
        unit: Unit string, empty when the descriptor has none.
        range: Range tokens, when the descriptor provides them.
    """
    sensor_id: int
    channel: int
    device: str
    description: str
    category: SensorCategory
    value: float
    unit: str = ""
    range: Optional[tuple[str, ...]] = None

    @property
    def value_text(self) -> str:
        return f"{self.value:.2f}"

    def render(self) -> str:
        line = f"#{self.sensor_id}: {self.device:8}: {self.description:14} {self.value:8.2f} {self.unit}"
        if self.range is not None:
            line += f" [{', '.join(self.range)}]"
        return line


@dataclass(frozen=True)
class MissingReading:
    """Placeholder for a status entry whose sensor is not in the descriptor."""
    entry: StatusEntry

    @property
    def sensor_id(self) -> int:
        return self.entry.sensor_id

    def render(self) -> str:
        return (
            f"No description for sensor {self.entry.sensor_id} "
            f"(channel {self.entry.channel}, value {self.entry.value}) found."
        )


AnyReading = Union[Reading, MissingReading]


def device_label(descriptor: Descriptor, sensor: SensorDescription) -> str:
    """Name of the linked block; several blocks are concatenated in descriptor order."""
    blocks = descriptor.blocks_for(sensor)
    if not blocks:
        return UNKNOWN_DEVICE
    return "".join(blk.description for blk in blocks)


def correlate(entry: StatusEntry, descriptor: Descriptor) -> AnyReading:
    sensor = descriptor.sensor(entry.sensor_id)
    if sensor is None:
        return MissingReading(entry=entry)
    return Reading(
        sensor_id=entry.sensor_id,
        channel=entry.channel,
        device=device_label(descriptor, sensor),
        description=sensor.description,
        category=sensor.category,
        value=entry.value,
        unit=sensor.unit or "",
        range=sensor.range,
    )


def correlate_all(entries: Iterable[StatusEntry], descriptor: Descriptor) -> list[AnyReading]:
    return [correlate(entry, descriptor) for entry in entries]
