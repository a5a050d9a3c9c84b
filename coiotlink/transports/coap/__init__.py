from coiotlink.transports.coap.transport import COAP_PORT, CoapTransport

__all__ = ["COAP_PORT", "CoapTransport"]
