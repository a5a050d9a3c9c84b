"""
Device identity and freshness decoding.

Interprets the global device id string and the two-byte validity and
serial options attached to CoIoT messages.
"""
from coiotlink.parsing.identity.decode import (
    CoIoTVersion,
    DeviceIdentity,
    UnknownVersion,
    Version,
    decode_device_id,
    decode_serial,
    decode_validity,
    parse_device_id,
    parse_version,
)

__all__ = [
    "CoIoTVersion",
    "DeviceIdentity",
    "UnknownVersion",
    "Version",
    "decode_device_id",
    "decode_serial",
    "decode_validity",
    "parse_device_id",
    "parse_version",
]
