"""
Prometheus exposition of the poller counters
"""
from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily

PREFIX = 'handbook_exporter'


class PollerCollector:
    """Custom collector that reads a consistent snapshot at scrape time"""

    def __init__(self, poller):
        self.poller = poller

    def collect(self):
        data = self.poller.snapshot()

        yield CounterMetricFamily(
            f'{PREFIX}_polls', 'Poll iterations run', value=data['polls']
        )
        yield CounterMetricFamily(
            f'{PREFIX}_errors', 'Poll iterations with at least one failed query',
            value=data['errors']
        )

        last_success = GaugeMetricFamily(
            f'{PREFIX}_last_success_timestamp', 'Unix time of the last fully successful poll'
        )
        if data['last_success_ts'] is not None:
            last_success.add_metric([], data['last_success_ts'])
        yield last_success

        values = GaugeMetricFamily(
            f'{PREFIX}_value', 'Latest value per polled series', labels=['series']
        )
        for key in sorted(data['values']):
            values.add_metric([key], data['values'][key])
        yield values


def build_registry(poller):
    registry = CollectorRegistry(auto_describe=False)
    registry.register(PollerCollector(poller))
    return registry


def render_metrics(registry):
    """Text exposition format bytes for a registry"""
    return generate_latest(registry)
