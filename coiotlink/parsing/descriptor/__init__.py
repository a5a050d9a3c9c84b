"""
Descriptor catalog: blocks and sensor definitions of one device.
"""
from coiotlink.parsing.descriptor.model import (
    BlockDescription,
    Descriptor,
    SensorCategory,
    SensorDescription,
    decode_descriptor,
)

__all__ = [
    "BlockDescription",
    "Descriptor",
    "SensorCategory",
    "SensorDescription",
    "decode_descriptor",
]
