from __future__ import annotations

from abc import ABC, abstractmethod

from coiotlink.domain.response import Response
from coiotlink.parsing.descriptor import Descriptor
from coiotlink.parsing.readings import AnyReading, correlate_all
from coiotlink.parsing.status import Status

DESCRIPTOR_PATH = "cit/d"
STATUS_PATH = "cit/s"


class DeviceTransport(ABC):
    """Request/response access to a single CoIoT device."""

    @abstractmethod
    def get(self, path: str) -> Response:
        ...

    def get_descriptor(self) -> Descriptor:
        return self.get(DESCRIPTOR_PATH).decode_descriptor()

    def get_status(self) -> Status:
        return self.get(STATUS_PATH).decode_status()

    def get_readings(self, descriptor: Descriptor | None = None) -> list[AnyReading]:
        """Fetch the status and join it with ``descriptor`` (fetched first when not given)."""
        if descriptor is None:
            descriptor = self.get_descriptor()
        status = self.get_status()
        return correlate_all(status.entries, descriptor)
