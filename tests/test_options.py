"""Tests for the CoIoT option numbers and the option table."""
from aiocoap import Message
from aiocoap.numbers.codes import Code
from aiocoap.numbers.optionnumbers import OptionNumber
from aiocoap.optiontypes import OpaqueOption

from coiotlink.parsing.options import COIOT_OPTION_BASE, CoIoTOption, OptionTable


def test_option_numbers():
    assert CoIoTOption.GLOBAL_DEVID == 3332
    assert CoIoTOption.STATUS_VALIDITY == 3412
    assert CoIoTOption.STATUS_SERIAL == 3420
    assert COIOT_OPTION_BASE == 3332


def test_option_numbers_do_not_collide_with_standard_options():
    standard = {int(number) for number in OptionNumber.__members__.values()}
    for option in CoIoTOption:
        assert int(option) not in standard


def test_from_pairs_groups_by_code_in_wire_order():
    table = OptionTable.from_pairs([
        (3332, b"first"),
        (11, b"cit"),
        (3332, b"second"),
    ])
    assert table.get(CoIoTOption.GLOBAL_DEVID) == (b"first", b"second")
    assert table.get(11) == (b"cit",)
    assert table.first(CoIoTOption.GLOBAL_DEVID) == b"first"


def test_missing_option_is_empty():
    table = OptionTable.from_pairs([(11, b"cit")])
    assert table.get(CoIoTOption.STATUS_SERIAL) == ()
    assert table.first(CoIoTOption.STATUS_SERIAL) is None
    assert CoIoTOption.STATUS_SERIAL not in table
    assert 11 in table


def test_from_message():
    message = Message(code=Code.CONTENT, payload=b"{}")
    message.opt.add_option(OpaqueOption(OptionNumber(3332), b"SHSW-25#A4CF12F3ED31#2"))
    message.opt.add_option(OpaqueOption(OptionNumber(3412), b"\x01\x00"))
    table = OptionTable.from_message(message)
    assert table.first(CoIoTOption.GLOBAL_DEVID) == b"SHSW-25#A4CF12F3ED31#2"
    assert table.first(CoIoTOption.STATUS_VALIDITY) == b"\x01\x00"
    assert len(table) == 2


def test_values_are_not_validated():
    table = OptionTable.from_pairs([(3420, b"\xff")])
    assert table.first(CoIoTOption.STATUS_SERIAL) == b"\xff"
