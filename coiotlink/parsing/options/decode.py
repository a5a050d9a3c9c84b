"""
CoIoT option numbers and the per-message option index.

CoIoT reuses the CoAP option space above the IANA-registered range. The
vendor options are laid out from a base number of 3332 in steps of eight.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional, Union

from aiocoap import Message

COIOT_OPTION_BASE = 3332


class CoIoTOption(IntEnum):
    """Vendor option numbers carried on CoIoT responses and announcements."""
    GLOBAL_DEVID = COIOT_OPTION_BASE
    STATUS_VALIDITY = COIOT_OPTION_BASE + 8 * (10 + 0)
    STATUS_SERIAL = COIOT_OPTION_BASE + 8 * (10 + 1)


OptionKey = Union[CoIoTOption, int]


@dataclass(frozen=True)
class OptionTable:
    """
    Raw option values of one message, grouped by numeric option code.

    Values for a repeated option keep the order they had on the wire. No
    interpretation of the bytes happens here.
    """
    values: dict[int, tuple[bytes, ...]] = field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, bytes]]) -> "OptionTable":
        grouped: dict[int, list[bytes]] = {}
        for code, value in pairs:
            grouped.setdefault(int(code), []).append(bytes(value))
        return cls(values={code: tuple(vals) for code, vals in grouped.items()})

    @classmethod
    def from_message(cls, message: Message) -> "OptionTable":
        return cls.from_pairs(
            (int(option.number), option.encode()) for option in message.opt.option_list()
        )

    def get(self, option: OptionKey) -> tuple[bytes, ...]:
        """Return every value registered under ``option``; empty when absent."""
        return self.values.get(int(option), ())

    def first(self, option: OptionKey) -> Optional[bytes]:
        found = self.get(option)
        return found[0] if found else None

    def __contains__(self, option: object) -> bool:
        if not isinstance(option, int):
            return False
        return int(option) in self.values

    def __len__(self) -> int:
        return len(self.values)
