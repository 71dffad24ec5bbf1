"""
Handbook configuration settings
"""
import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name, default):
    raw = os.environ.get(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(',') if item.strip()]


class HandbookConfig:
    """Centralized configuration for the handbook service"""

    # Server settings
    HOST = os.environ.get('HANDBOOK_HOST', '0.0.0.0')
    PORT = int(os.environ.get('HANDBOOK_PORT', 8081))

    # Rate limiting
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_DEFAULT = os.environ.get('HANDBOOK_RATELIMIT_DEFAULT', "100 per minute")

    # Knowledge base
    GUIDE_PATH = os.environ.get(
        'HANDBOOK_GUIDE_PATH', str(PACKAGE_DIR / 'data' / 'devops_interview_guide.md')
    )

    # Background pollers are off unless asked for; the API works without them
    START_POLLERS = _env_bool('HANDBOOK_START_POLLERS', False)

    # Metrics poller
    EXPORTER_BASE_URL = os.environ.get('HANDBOOK_EXPORTER_BASE_URL', 'http://localhost:9090')
    EXPORTER_QUERIES = _env_list('HANDBOOK_EXPORTER_QUERIES', ['up'])
    EXPORTER_INTERVAL = float(os.environ.get('HANDBOOK_EXPORTER_INTERVAL', 15))
    EXPORTER_TIMEOUT = float(os.environ.get('HANDBOOK_EXPORTER_TIMEOUT', 5))

    # Threshold-triggered restarter
    RESTARTER_METRIC = os.environ.get('HANDBOOK_RESTARTER_METRIC', 'cpu')
    RESTARTER_THRESHOLD = float(os.environ.get('HANDBOOK_RESTARTER_THRESHOLD', 90))
    RESTARTER_INTERVAL = float(os.environ.get('HANDBOOK_RESTARTER_INTERVAL', 60))
    RESTARTER_SERVICE = os.environ.get('HANDBOOK_RESTARTER_SERVICE', 'nginx')
    # Empty means "systemctl restart <RESTARTER_SERVICE>"
    RESTARTER_COMMAND = os.environ.get('HANDBOOK_RESTARTER_COMMAND', '')
    RESTARTER_COMMAND_TIMEOUT = float(os.environ.get('HANDBOOK_RESTARTER_COMMAND_TIMEOUT', 30))
    RESTARTER_DRY_RUN = _env_bool('HANDBOOK_RESTARTER_DRY_RUN', False)
    RESTARTER_COOLDOWN = float(os.environ.get('HANDBOOK_RESTARTER_COOLDOWN', 0))
    RESTARTER_DISK_PATH = os.environ.get('HANDBOOK_RESTARTER_DISK_PATH', '/')

    # Buffers
    MAX_LOG_ENTRIES = int(os.environ.get('HANDBOOK_MAX_LOG_ENTRIES', 1000))
    MAX_RESTART_HISTORY = int(os.environ.get('HANDBOOK_MAX_RESTART_HISTORY', 50))

    @classmethod
    def as_dict(cls):
        """Upper-case settings as a plain dict, for Flask's config"""
        return {key: getattr(cls, key) for key in dir(cls) if key.isupper()}
