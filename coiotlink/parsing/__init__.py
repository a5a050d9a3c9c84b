"""
This package contains all modules related to decoding data received from
CoIoT devices.

Sub-packages handle specific parts of the protocol:

- ``options``: CoIoT vendor option numbers and the per-message option index.
- ``identity``: Device id string, validity interval and sequence number.
- ``descriptor``: The ``/cit/d`` block and sensor catalog.
- ``status``: The compact ``/cit/s`` status stream.
- ``readings``: Joining status entries with the descriptor for display.
"""
