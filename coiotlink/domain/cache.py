from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from coiotlink.parsing.descriptor import Descriptor
from coiotlink.parsing.identity import CoIoTVersion, DeviceIdentity


@dataclass(frozen=True)
class CachedDescriptor:
    version: CoIoTVersion
    descriptor: Descriptor


class DescriptorCache:
    """
    Descriptors keyed by device serial.

    An entry is only returned while the device reports the protocol version
    it had when the descriptor was stored.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CachedDescriptor] = {}

    def get(self, identity: DeviceIdentity) -> Optional[Descriptor]:
        cached = self._entries.get(identity.device_serial)
        if cached is None:
            return None
        if cached.version != identity.version:
            self.invalidate(identity.device_serial)
            return None
        return cached.descriptor

    def put(self, identity: DeviceIdentity, descriptor: Descriptor) -> None:
        self._entries[identity.device_serial] = CachedDescriptor(version=identity.version, descriptor=descriptor)

    def invalidate(self, serial: str) -> None:
        self._entries.pop(serial, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, serial: object) -> bool:
        return serial in self._entries

    def __len__(self) -> int:
        return len(self._entries)
