from coiotlink.parsing.readings.view import (
    UNKNOWN_DEVICE,
    AnyReading,
    MissingReading,
    Reading,
    correlate,
    correlate_all,
    device_label,
)

__all__ = [
    "UNKNOWN_DEVICE",
    "AnyReading",
    "MissingReading",
    "Reading",
    "correlate",
    "correlate_all",
    "device_label",
]
