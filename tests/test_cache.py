"""Tests for the per-device descriptor cache."""
from coiotlink.domain import DescriptorCache
from coiotlink.parsing.descriptor import decode_descriptor
from coiotlink.parsing.identity import parse_device_id


def test_put_and_get(descriptor_json):
    cache = DescriptorCache()
    identity = parse_device_id("SHSW-25#A4CF12F3ED31#2")
    desc = decode_descriptor(descriptor_json)
    cache.put(identity, desc)
    assert cache.get(identity) is desc
    assert "A4CF12F3ED31" in cache
    assert len(cache) == 1


def test_miss_for_other_serial(descriptor_json):
    cache = DescriptorCache()
    cache.put(parse_device_id("SHSW-25#AAAA#2"), decode_descriptor(descriptor_json))
    assert cache.get(parse_device_id("SHSW-25#BBBB#2")) is None


def test_version_change_invalidates(descriptor_json):
    cache = DescriptorCache()
    cache.put(parse_device_id("SHSW-25#AAAA#1"), decode_descriptor(descriptor_json))
    assert cache.get(parse_device_id("SHSW-25#AAAA#2")) is None
    assert "AAAA" not in cache


def test_unknown_version_matches_itself(descriptor_json):
    cache = DescriptorCache()
    desc = decode_descriptor(descriptor_json)
    cache.put(parse_device_id("X#AAAA#5"), desc)
    assert cache.get(parse_device_id("X#AAAA#5")) is desc
    assert cache.get(parse_device_id("X#AAAA#6")) is None


def test_invalidate_and_clear(descriptor_json):
    cache = DescriptorCache()
    desc = decode_descriptor(descriptor_json)
    cache.put(parse_device_id("X#A#2"), desc)
    cache.put(parse_device_id("X#B#2"), desc)
    cache.invalidate("A")
    cache.invalidate("missing")
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0
