import logging
import threading
from collections import deque
from typing import Deque, Dict, List


class RingBufferHandler(logging.Handler):
    def __init__(self, max_entries: int = 200):
        super().__init__()
        self.max_entries = max_entries
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        event = {
            "event": record.getMessage(),
            "level": record.levelname,
            "ts": record.created,
            "details": getattr(record, "details", {}),
        }
        with self._lock:
            self._events.append(event)

    def get_events(self) -> List[Dict]:
        with self._lock:
            return list(self._events)

    def resize(self, max_entries: int) -> None:
        with self._lock:
            self.max_entries = max_entries
            self._events = deque(self._events, maxlen=max_entries)


def create_logger(name: str, ring_size: int, level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())
    if logger.handlers:
        ring_buffer(logger).resize(ring_size)
        return logger
    handler = RingBufferHandler(max_entries=ring_size)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def ring_buffer(logger: logging.Logger) -> RingBufferHandler:
    for handler in logger.handlers:
        if isinstance(handler, RingBufferHandler):
            return handler
    raise LookupError(f"logger '{logger.name}' has no ring buffer handler")
