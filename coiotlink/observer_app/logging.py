import logging
import sys
import threading
from collections import deque
from typing import Any, Deque, Dict, List, Optional

PAYLOAD_PREVIEW_BYTES = 32


class RingBufferHandler(logging.Handler):
    """Keeps the most recent observer events in memory for inspection."""

    def __init__(self, max_entries: int = 200):
        super().__init__()
        self.max_entries = max_entries
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        event = {
            "event": record.getMessage(),
            "level": record.levelname,
            "levelno": record.levelno,
            "ts": record.created,
            "details": summarize(getattr(record, "details", {})),
        }
        with self._lock:
            self._events.append(event)

    def get_events(self, min_level: int = logging.NOTSET) -> List[Dict]:
        with self._lock:
            return [event for event in self._events if event["levelno"] >= min_level]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def create_logger(name: str, ring_size: int, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    handler = RingBufferHandler(max_entries=ring_size)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if verbose:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(formatter)
        logger.addHandler(stream)
    logger.propagate = False
    return logger


def ring_buffer(logger: logging.Logger) -> Optional[RingBufferHandler]:
    for handler in logger.handlers:
        if isinstance(handler, RingBufferHandler):
            return handler
    return None


def log_event(logger: logging.Logger, event: str, details: Optional[dict] = None, level: int = logging.INFO) -> None:
    logger.log(level, event, extra={"details": details or {}})


def summarize(details: Optional[dict]) -> dict:
    """Shorten raw byte values so datagrams do not flood the event buffer."""
    if not details:
        return {}
    cleaned: dict[str, Any] = {}
    for key, value in details.items():
        if isinstance(value, (bytes, bytearray)):
            preview = bytes(value[:PAYLOAD_PREVIEW_BYTES]).hex()
            cleaned[key] = preview + ("..." if len(value) > PAYLOAD_PREVIEW_BYTES else "")
        else:
            cleaned[key] = value
    return cleaned
