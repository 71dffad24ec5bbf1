"""
System Logs Service
Reads the in-memory log buffer filled by LogBufferHandler
"""

from .. import register_component
from ...core.logs import get_buffer

LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@register_component('system_logs')
class SystemLogsService:
    """Service for System Logs component"""

    def get_logs(self, level_filter='ALL', limit=50):
        """Get buffered log entries, newest last

        level_filter keeps entries at exactly that level; 'ALL' keeps everything.
        """
        logs = list(get_buffer())

        if limit is not None and limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")

        level_filter = (level_filter or 'ALL').upper()
        if level_filter != 'ALL':
            if level_filter not in LEVELS:
                raise ValueError(f"Unknown log level: {level_filter}")
            logs = [log for log in logs if log.get('level') == level_filter]

        if limit and len(logs) > limit:
            logs = logs[-limit:]

        return logs

    def counts_by_level(self):
        counts = {level: 0 for level in LEVELS}
        for log in get_buffer():
            level = log.get('level')
            if level in counts:
                counts[level] += 1
        return counts


