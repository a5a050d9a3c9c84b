"""
The device descriptor served at ``/cit/d``.

The descriptor lists the logical blocks of a device (relay channels, meters,
inputs) and every sensor the device reports in its compact status stream.
It uses single-letter keys on the wire; the models below map them to
readable attribute names.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt, StrictStr, model_validator

from coiotlink.parsing.payload import decode_json_payload

BlockId = Annotated[StrictInt, Field(ge=0, le=0xFFFFFFFF)]
SensorId = Annotated[StrictInt, Field(ge=0, le=0xFFFFFFFF)]


class SensorCategory(str, Enum):
    """Sensor kinds, valued by their wire code."""
    ALARM = "A"
    CURRENT = "I"
    ENERGY = "E"
    EVENT_COUNTER = "EVC"
    POWER = "P"
    STATUS = "S"
    VOLTAGE = "V"


def _one_or_many(value: Any) -> Any:
    if value is None or isinstance(value, (list, tuple)):
        return value
    return [value]


OneOrMany = BeforeValidator(_one_or_many)


class BlockDescription(BaseModel):
    model_config = ConfigDict(frozen=True)

    block_id: BlockId = Field(alias="I")
    description: StrictStr = Field(alias="D")


class SensorDescription(BaseModel):
    """
    One sensor of the device.

    ``range`` and ``links`` may be a single value or a list on the wire; both
    are normalised to tuples.
    """
    model_config = ConfigDict(frozen=True)

    sensor_id: SensorId = Field(alias="I")
    description: StrictStr = Field(alias="D")
    category: SensorCategory = Field(alias="T")
    unit: Optional[StrictStr] = Field(None, alias="U")
    range: Annotated[Optional[tuple[StrictStr, ...]], OneOrMany] = Field(None, alias="R")
    links: Annotated[tuple[BlockId, ...], OneOrMany] = Field(alias="L", min_length=1)


class Descriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    blocks: tuple[BlockDescription, ...] = Field(alias="blk")
    sensors: tuple[SensorDescription, ...] = Field(alias="sen")

    @model_validator(mode="after")
    def _unique_ids(self) -> "Descriptor":
        block_ids = [blk.block_id for blk in self.blocks]
        if len(block_ids) != len(set(block_ids)):
            raise ValueError("block ids must be unique")
        sensor_ids = [sen.sensor_id for sen in self.sensors]
        if len(sensor_ids) != len(set(sensor_ids)):
            raise ValueError("sensor ids must be unique")
        return self

    def sensor(self, sensor_id: int) -> Optional[SensorDescription]:
        for sen in self.sensors:
            if sen.sensor_id == sensor_id:
                return sen
        return None

    def blocks_for(self, sensor: SensorDescription) -> list[BlockDescription]:
        """Blocks the sensor links to, in descriptor order. Dangling links are skipped."""
        return [blk for blk in self.blocks if blk.block_id in sensor.links]


def decode_descriptor(payload: bytes) -> Descriptor:
    return decode_json_payload(payload, Descriptor)
