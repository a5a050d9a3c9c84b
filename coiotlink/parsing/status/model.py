"""
The compact live status served at ``/cit/s`` and pushed over multicast.

Each reading is a bare ``[channel, sensor_id, value]`` array; position, not
key, identifies the field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from coiotlink.parsing.payload import decode_json_payload

U32 = Annotated[StrictInt, Field(ge=0, le=0xFFFFFFFF)]


@dataclass(frozen=True)
class StatusEntry:
    channel: int
    sensor_id: int
    value: float


class Status(BaseModel):
    model_config = ConfigDict(frozen=True)

    generic: tuple[tuple[U32, U32, StrictFloat], ...] = Field(alias="G")

    @property
    def entries(self) -> tuple[StatusEntry, ...]:
        return tuple(
            StatusEntry(channel=channel, sensor_id=sensor_id, value=float(value))
            for channel, sensor_id, value in self.generic
        )


def decode_status(payload: bytes) -> Status:
    return decode_json_payload(payload, Status)
