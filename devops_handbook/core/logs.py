"""
In-memory log buffer

Every record that goes through the standard logging tree is also kept in a
bounded deque so the dashboard can show recent activity without a log file.
"""
import logging
from collections import deque
from datetime import datetime

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

# Shared across all components
system_logs = deque(maxlen=1000)


class LogBufferHandler(logging.Handler):
    """Logging handler that appends dict entries to a deque"""

    def __init__(self, buffer=None, level=logging.NOTSET):
        super().__init__(level)
        self.buffer = system_logs if buffer is None else buffer

    def emit(self, record):
        try:
            self.buffer.append({
                'timestamp': datetime.fromtimestamp(record.created).isoformat(),
                'level': record.levelname,
                'logger': record.name,
                'message': record.getMessage()
            })
        except Exception:
            self.handleError(record)


def resize_buffer(maxlen):
    """Replace the shared buffer with one of a different size, keeping the newest entries"""
    global system_logs
    if system_logs.maxlen == maxlen:
        return system_logs
    resized = deque(system_logs, maxlen=maxlen)
    system_logs = resized
    for handler in logging.getLogger().handlers:
        if isinstance(handler, LogBufferHandler):
            handler.buffer = resized
    return resized


def get_buffer():
    return system_logs


def configure_logging(level='INFO', max_entries=None):
    """Configure root logging and attach the buffer handler once"""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)

    if max_entries:
        resize_buffer(max_entries)

    buffer_handlers = [h for h in root.handlers if isinstance(h, LogBufferHandler)]
    if buffer_handlers:
        for handler in buffer_handlers:
            handler.buffer = system_logs
    else:
        root.addHandler(LogBufferHandler(system_logs))

    return root
