from coiotlink.parsing.status.model import Status, StatusEntry, decode_status

__all__ = ["Status", "StatusEntry", "decode_status"]
