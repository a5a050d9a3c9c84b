from coiotlink.core.errors import (
    CoIoTError,
    DecodeError,
    EncodingError,
    FieldTooShortError,
    MalformedIdentityError,
    ReceiveTimeoutError,
    SchemaError,
    TransportError,
)
from coiotlink.domain import DescriptorCache, Response
from coiotlink.observer_app import CoIoTSettings, MulticastObserver
from coiotlink.transports.coap import CoapTransport
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "CoapTransport",
    "CoIoTError",
    "CoIoTSettings",
    "DecodeError",
    "DescriptorCache",
    "EncodingError",
    "FieldTooShortError",
    "MalformedIdentityError",
    "MulticastObserver",
    "ReceiveTimeoutError",
    "Response",
    "SchemaError",
    "TransportError",
]

try:
    __version__ = version("coiotlink")
except PackageNotFoundError:
    __version__ = "0.0.0"
