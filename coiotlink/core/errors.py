"""
Exception hierarchy shared by the parsing, transport and observer layers.
"""
from __future__ import annotations

from typing import Optional


class CoIoTError(Exception):
    """Base class for every error raised by coiotlink."""
    pass


class TransportError(CoIoTError):
    """Raised when a CoAP request or a socket operation fails."""
    pass


class ReceiveTimeoutError(TransportError):
    """Raised when the multicast socket receives nothing within its timeout."""
    pass


class DecodeError(CoIoTError):
    """Base class for failures while interpreting received bytes."""
    pass


class EncodingError(DecodeError):
    """Raised when a payload or option value is not valid UTF-8 text."""
    pass


class SchemaError(DecodeError):
    """
    Raised when a JSON payload does not have the expected shape.

    Attributes:
        pretty: The offending JSON re-indented for diagnostics, or ``None``
            if the text could not be parsed as JSON at all.
    """

    def __init__(self, message: str, pretty: Optional[str] = None) -> None:
        super().__init__(message)
        self.pretty = pretty

    def __str__(self) -> str:
        base = super().__str__()
        if self.pretty is None:
            return base
        return f"{base}\n{self.pretty}"


class MalformedIdentityError(DecodeError):
    """Raised when a device-id lacks its separators or has a bad version tag."""
    pass


class FieldTooShortError(DecodeError):
    """Raised when a fixed-width binary option carries too few bytes."""
    pass
