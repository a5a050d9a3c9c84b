import pytest
from aiocoap.numbers.optionnumbers import OptionNumber
from aiocoap.options import Options
from aiocoap.optiontypes import OpaqueOption

STATUS_PUSH = 30
CONTENT = 69  # 2.05


def _build_datagram(code: int = STATUS_PUSH, options=(), payload: bytes = b"", mid: int = 1) -> bytes:
    """Helper: encode a non-confirmable CoAP message with an empty token."""
    opts = Options()
    for number, value in options:
        opts.add_option(OpaqueOption(OptionNumber(number), value))
    header = bytes([0x50, code]) + mid.to_bytes(2, "big")
    body = opts.encode()
    if payload:
        body += b"\xff" + payload
    return header + body


@pytest.fixture
def build_datagram():
    return _build_datagram


@pytest.fixture
def descriptor_json() -> bytes:
    return (
        b'{"blk":[{"I":1,"D":"Relay0"},{"I":2,"D":"Relay1"},{"I":3,"D":"Device"}],'
        b'"sen":['
        b'{"I":111,"T":"P","D":"Power","U":"W","R":"0/2650","L":1},'
        b'{"I":112,"T":"S","D":"Output","R":["0/1"],"L":[1]},'
        b'{"I":211,"T":"P","D":"Power","U":"W","R":"0/2650","L":2},'
        b'{"I":116,"T":"V","D":"Voltage","U":"V","L":3},'
        b'{"I":9103,"T":"EVC","D":"cfgChanged","R":"U16","L":[1,2]},'
        b'{"I":6102,"T":"A","D":"overpower","R":["0/1","-1"],"L":7}'
        b']}'
    )


@pytest.fixture
def status_json() -> bytes:
    return b'{"G":[[0,111,42.5],[0,112,1],[0,116,230.1],[0,9103,3],[0,6102,0],[0,4242,7.25]]}'
