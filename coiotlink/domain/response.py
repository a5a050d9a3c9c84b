"""
A decoded CoIoT message and accessors for its vendor options and payload.
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Optional

from aiocoap import Message
from aiocoap.error import UnparsableMessage

from coiotlink.core.errors import DecodeError, FieldTooShortError
from coiotlink.parsing.descriptor import Descriptor, decode_descriptor
from coiotlink.parsing.identity import (
    CoIoTVersion,
    DeviceIdentity,
    decode_device_id,
    decode_serial,
    decode_validity,
    parse_device_id,
)
from coiotlink.parsing.options import CoIoTOption, OptionTable
from coiotlink.parsing.status import Status, decode_status

# Non-standard CoAP code (0.30) used by devices for unsolicited status pushes.
STATUS_PUSH_CODE = 30

logger = logging.getLogger(__name__)


class Response:
    """
    Wraps a decoded CoAP message.

    The option table is built once; the identity is re-parsed from the raw
    device-id option on every access.
    """

    def __init__(self, message: Message, remote: Any = None) -> None:
        self.message = message
        self.remote = remote if remote is not None else message.remote
        self.options = OptionTable.from_message(message)

    @classmethod
    def from_datagram(cls, data: bytes, remote: Any = None) -> "Response":
        try:
            message = Message.decode(data, remote)
        except (UnparsableMessage, ValueError) as exc:
            # ValueError covers typed standard options with undecodable values
            raise DecodeError(f"Not a CoAP message: {exc}") from exc
        return cls(message, remote=remote)

    # ---- raw message ----
    @property
    def code(self) -> int:
        return int(self.message.code)

    @property
    def payload(self) -> bytes:
        return self.message.payload

    @property
    def is_status_push(self) -> bool:
        return self.code == STATUS_PUSH_CODE

    # ---- identity ----
    @property
    def device_id(self) -> Optional[str]:
        raw = self.options.first(CoIoTOption.GLOBAL_DEVID)
        if raw is None:
            return None
        return decode_device_id(raw)

    @property
    def identity(self) -> Optional[DeviceIdentity]:
        device_id = self.device_id
        if device_id is None:
            return None
        return parse_device_id(device_id)

    @property
    def device_type(self) -> Optional[str]:
        identity = self.identity
        return identity.device_type if identity else None

    @property
    def device_serial(self) -> Optional[str]:
        identity = self.identity
        return identity.device_serial if identity else None

    @property
    def coiot_version(self) -> Optional[CoIoTVersion]:
        identity = self.identity
        return identity.version if identity else None

    # ---- freshness ----
    @property
    def validity_duration(self) -> Optional[timedelta]:
        raw = self.options.first(CoIoTOption.STATUS_VALIDITY)
        if raw is None:
            return None
        try:
            return decode_validity(raw)
        except FieldTooShortError as exc:
            logger.debug("validity_option_short", extra={"details": {"error": str(exc)}})
            return None

    @property
    def msg_seq_no(self) -> Optional[int]:
        raw = self.options.first(CoIoTOption.STATUS_SERIAL)
        if raw is None:
            return None
        try:
            return decode_serial(raw)
        except FieldTooShortError as exc:
            logger.debug("serial_option_short", extra={"details": {"error": str(exc)}})
            return None

    # ---- payload ----
    def decode_descriptor(self) -> Descriptor:
        return decode_descriptor(self.payload)

    def decode_status(self) -> Status:
        return decode_status(self.payload)

    def __repr__(self) -> str:
        return f"Response(code={self.code}, remote={self.remote!r}, options={sorted(self.options.values)})"
