"""
CoAP option codec for the CoIoT vendor options.

Maps the symbolic vendor options to their numeric codes and indexes the raw
option values of a decoded message.
"""
from coiotlink.parsing.options.decode import COIOT_OPTION_BASE, CoIoTOption, OptionTable

__all__ = ["COIOT_OPTION_BASE", "CoIoTOption", "OptionTable"]
