"""
Decoders for the CoIoT identity and freshness options.

The global device id is a UTF-8 string of the form
``<type>#<serial>#<protocol-version>``. The validity and serial options are
two-byte little-endian integers.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from enum import IntEnum
from typing import Union

from coiotlink.core.binary import U16_WIDTH, u16_le, validity_from_raw
from coiotlink.core.errors import EncodingError, FieldTooShortError, MalformedIdentityError

SEPARATOR = "#"
U32_MAX = 0xFFFFFFFF

_DECIMAL = re.compile(r"\+?[0-9]+")


class Version(IntEnum):
    """Protocol revisions with a known wire tag."""
    V1 = 1
    V2 = 2


@dataclass(frozen=True)
class UnknownVersion:
    """A numeric protocol tag that is not one of the known revisions."""
    number: int


CoIoTVersion = Union[Version, UnknownVersion]

_VERSION_TAGS: dict[str, Version] = {
    "1": Version.V1,
    "2": Version.V2,
}


@dataclass(frozen=True)
class DeviceIdentity:
    """
    The three parts of a global device id.

    Attributes:
        device_type: Model code, e.g. ``"SHSW-25"``.
        device_serial: Device serial / MAC fragment.
        version: Parsed protocol version tag.
        version_tag: The tag exactly as it appeared on the wire.
    """
    device_type: str
    device_serial: str
    version: CoIoTVersion
    version_tag: str

    def __str__(self) -> str:
        return SEPARATOR.join((self.device_type, self.device_serial, self.version_tag))


def parse_version(tag: str) -> CoIoTVersion:
    """
    Map a version tag to a protocol version.

    Only the literal tags ``"1"`` and ``"2"`` select a known revision; any
    other unsigned 32-bit decimal, optionally prefixed with ``+``, becomes
    ``UnknownVersion``.

    Raises:
        MalformedIdentityError: If the tag is not an unsigned decimal number.
    """
    known = _VERSION_TAGS.get(tag)
    if known is not None:
        return known
    if not _DECIMAL.fullmatch(tag):
        raise MalformedIdentityError(f"Version tag is not numeric: {tag!r}")
    number = int(tag)
    if number > U32_MAX:
        raise MalformedIdentityError(f"Version tag out of range: {tag!r}")
    return UnknownVersion(number)


def parse_device_id(text: str) -> DeviceIdentity:
    """
    Split a global device id into type, serial and version.

    The type is everything before the first ``#``, the serial runs up to the
    second ``#`` and the version tag is whatever follows the last ``#``.

    Raises:
        MalformedIdentityError: If either separator is missing or the version
            tag is not numeric.
    """
    device_type, sep, rest = text.partition(SEPARATOR)
    if not sep:
        raise MalformedIdentityError(f"Device id has no '{SEPARATOR}' separator: {text!r}")
    device_serial, sep, _ = rest.partition(SEPARATOR)
    if not sep:
        raise MalformedIdentityError(f"Device id has no second '{SEPARATOR}' separator: {text!r}")
    version_tag = text.rpartition(SEPARATOR)[2]
    return DeviceIdentity(
        device_type=device_type,
        device_serial=device_serial,
        version=parse_version(version_tag),
        version_tag=version_tag,
    )


def decode_device_id(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Device id is not valid UTF-8: {raw!r}") from exc


def _read_u16(raw: bytes, name: str) -> int:
    try:
        return u16_le(raw)
    except ValueError as exc:
        raise FieldTooShortError(f"{name} needs {U16_WIDTH} bytes, got {len(raw)}") from exc


def decode_validity(raw: bytes) -> timedelta:
    """
    Decode the status validity option.

    Raises:
        FieldTooShortError: If fewer than two bytes are present.
    """
    return validity_from_raw(_read_u16(raw, "StatusValidity"))


def decode_serial(raw: bytes) -> int:
    """
    Decode the status serial (announcement sequence number).

    Raises:
        FieldTooShortError: If fewer than two bytes are present.
    """
    return _read_u16(raw, "StatusSerial")
