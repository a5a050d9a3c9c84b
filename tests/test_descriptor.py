"""Tests for descriptor (/cit/d) decoding."""
import json

import pytest

from coiotlink.core.errors import EncodingError, SchemaError
from coiotlink.parsing.descriptor import Descriptor, SensorCategory, decode_descriptor


def _descriptor(sensor: dict, blocks=None) -> bytes:
    """Helper: wrap one sensor definition into a descriptor payload."""
    blocks = blocks if blocks is not None else [{"I": 1, "D": "Relay"}]
    return json.dumps({"blk": blocks, "sen": [sensor]}).encode()


def test_decode_full_descriptor(descriptor_json):
    desc = decode_descriptor(descriptor_json)
    assert [blk.block_id for blk in desc.blocks] == [1, 2, 3]
    assert desc.blocks[0].description == "Relay0"
    power = desc.sensor(111)
    assert power is not None
    assert power.description == "Power"
    assert power.category is SensorCategory.POWER
    assert power.unit == "W"
    assert power.range == ("0/2650",)
    assert power.links == (1,)


def test_unit_and_range_are_optional(descriptor_json):
    desc = decode_descriptor(descriptor_json)
    voltage = desc.sensor(116)
    assert voltage.range is None
    output = desc.sensor(112)
    assert output.unit is None


@pytest.mark.parametrize(
    "code, category",
    [
        ("A", SensorCategory.ALARM),
        ("I", SensorCategory.CURRENT),
        ("E", SensorCategory.ENERGY),
        ("EVC", SensorCategory.EVENT_COUNTER),
        ("P", SensorCategory.POWER),
        ("S", SensorCategory.STATUS),
        ("V", SensorCategory.VOLTAGE),
    ],
)
def test_category_codes(code, category):
    desc = decode_descriptor(_descriptor({"I": 1, "D": "x", "T": code, "L": 1}))
    assert desc.sensors[0].category is category


@pytest.mark.parametrize("code", ["T", "H", "EV", "B", "p", "", "Power", 1])
def test_unknown_category_is_schema_error(code):
    with pytest.raises(SchemaError):
        decode_descriptor(_descriptor({"I": 1, "D": "x", "T": code, "L": 1}))


def test_scalar_and_list_range_are_equivalent():
    scalar = decode_descriptor(_descriptor({"I": 1, "D": "x", "T": "S", "R": "x", "L": 1}))
    listed = decode_descriptor(_descriptor({"I": 1, "D": "x", "T": "S", "R": ["x"], "L": [1]}))
    assert scalar.sensors[0].range == listed.sensors[0].range == ("x",)
    assert scalar.sensors[0].links == listed.sensors[0].links == (1,)


def test_multiple_links():
    desc = decode_descriptor(_descriptor({"I": 1, "D": "x", "T": "S", "L": [1, 2]}))
    assert desc.sensors[0].links == (1, 2)


def test_empty_links_rejected():
    with pytest.raises(SchemaError):
        decode_descriptor(_descriptor({"I": 1, "D": "x", "T": "S", "L": []}))


def test_missing_links_rejected():
    with pytest.raises(SchemaError):
        decode_descriptor(_descriptor({"I": 1, "D": "x", "T": "S"}))


def test_string_sensor_id_rejected():
    with pytest.raises(SchemaError):
        decode_descriptor(_descriptor({"I": "1", "D": "x", "T": "S", "L": 1}))


def test_duplicate_block_ids_rejected():
    blocks = [{"I": 1, "D": "a"}, {"I": 1, "D": "b"}]
    with pytest.raises(SchemaError):
        decode_descriptor(_descriptor({"I": 1, "D": "x", "T": "S", "L": 1}, blocks=blocks))


def test_dangling_link_is_tolerated():
    desc = decode_descriptor(_descriptor({"I": 1, "D": "x", "T": "S", "L": 99}))
    assert desc.blocks_for(desc.sensors[0]) == []


def test_blocks_for_keeps_descriptor_order():
    blocks = [{"I": 2, "D": "b"}, {"I": 1, "D": "a"}]
    desc = decode_descriptor(_descriptor({"I": 1, "D": "x", "T": "S", "L": [1, 2]}, blocks=blocks))
    assert [blk.description for blk in desc.blocks_for(desc.sensors[0])] == ["b", "a"]


def test_unknown_keys_ignored():
    payload = b'{"blk":[],"sen":[],"extra":1}'
    desc = decode_descriptor(payload)
    assert desc == Descriptor.model_validate({"blk": [], "sen": []})


@pytest.mark.parametrize(
    "payload",
    [
        b'{"blocks":[{"block_id":1,"description":"R"}],"sensors":[]}',
        b'{"blk":[{"block_id":1,"description":"R"}],"sen":[]}',
        b'{"blk":[{"I":1,"D":"R"}],"sen":[{"sensor_id":1,"description":"P","category":"P","links":1}]}',
        b'{"blk":[]}',
        b'[]',
    ],
)
def test_field_names_are_not_wire_keys(payload):
    with pytest.raises(SchemaError):
        decode_descriptor(payload)


def test_invalid_utf8_is_encoding_error():
    with pytest.raises(EncodingError):
        decode_descriptor(b'{"blk":[\xff]}')


def test_schema_error_carries_pretty_json():
    with pytest.raises(SchemaError) as excinfo:
        decode_descriptor(b'{"blk":[{"I":1}],"sen":[]}')
    assert excinfo.value.pretty == json.dumps({"blk": [{"I": 1}], "sen": []}, indent=2)
    assert '"blk"' in str(excinfo.value)


def test_schema_error_without_pretty_for_invalid_json():
    with pytest.raises(SchemaError) as excinfo:
        decode_descriptor(b'{"blk": [')
    assert excinfo.value.pretty is None
    assert excinfo.value.__cause__ is not None
