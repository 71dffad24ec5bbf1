"""
Metrics Exporter Component
Polls a metrics-query endpoint and republishes what it sees
"""

from .exposition import PollerCollector, build_registry, render_metrics
from .query import QueryResponseError, parse_query_response, series_key
from .routes import metrics_exporter_bp, init_metrics_exporter, create_poller
from .service import MetricsPoller, PollerCounters

__all__ = [
    'MetricsPoller',
    'PollerCounters',
    'PollerCollector',
    'QueryResponseError',
    'build_registry',
    'render_metrics',
    'parse_query_response',
    'series_key',
    'metrics_exporter_bp',
    'init_metrics_exporter',
    'create_poller'
]
