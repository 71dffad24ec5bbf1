"""
Metrics Poller Service
Every interval: query the metrics endpoint, parse the answer, update counters.
Any failure is logged and the loop carries on with the next interval.
"""
import logging
import math
import threading
import time
from datetime import datetime

import requests

from .. import register_component
from .query import parse_query_response

logger = logging.getLogger(__name__)

QUERY_PATH = '/api/v1/query'


class PollerCounters:
    """In-memory counters updated by each poll"""

    def __init__(self):
        self.polls = 0
        self.successes = 0
        self.errors = 0
        self.last_poll = None
        self.last_success = None
        self.last_success_ts = None
        self.last_error = None
        self.values = {}

    def snapshot(self):
        return {
            'polls': self.polls,
            'successes': self.successes,
            'errors': self.errors,
            'last_poll': self.last_poll,
            'last_success': self.last_success,
            'last_success_ts': self.last_success_ts,
            'last_error': self.last_error,
            'values': dict(self.values)
        }


@register_component('metrics_exporter')
class MetricsPoller:
    """Polls a metrics-query endpoint on a fixed interval"""

    def __init__(self, base_url, queries, interval=15, timeout=5, session=None):
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        queries = [q for q in queries if q and q.strip()]
        if not queries:
            raise ValueError("At least one query is required")

        self.base_url = base_url.rstrip('/')
        self.queries = queries
        self.interval = interval
        self.timeout = timeout
        self.session = session or requests.Session()

        self.counters = PollerCounters()
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self.thread = None

    @property
    def query_url(self):
        return f'{self.base_url}{QUERY_PATH}'

    @property
    def running(self):
        return self.thread is not None and self.thread.is_alive()

    def start(self):
        """Start polling thread"""
        if self.running:
            return
        self._stop_event.clear()
        self.thread = threading.Thread(target=self._poll_loop, name='metrics-poller', daemon=True)
        self.thread.start()
        logger.info(f"Metrics poller started: {self.query_url} every {self.interval}s")

    def stop(self, timeout=2):
        """Stop polling thread"""
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout=timeout)
        logger.info("Metrics poller stopped")

    def run_forever(self):
        """Poll in the calling thread until stop() is called"""
        self._stop_event.clear()
        self._poll_loop()

    def _poll_loop(self):
        while not self._stop_event.is_set():
            self.poll_once()
            self._stop_event.wait(self.interval)

    def _fetch(self, query):
        response = self.session.get(self.query_url, params={'query': query}, timeout=self.timeout)
        response.raise_for_status()
        return parse_query_response(response.json(), query)

    def poll_once(self):
        """Run one poll; never raises. Returns True when every query succeeded."""
        samples = []
        failures = []

        for query in self.queries:
            try:
                samples.extend(self._fetch(query))
            except Exception as e:
                failures.append(f"{query}: {e}")

        now = datetime.now().isoformat()
        with self._lock:
            self.counters.polls += 1
            self.counters.last_poll = now
            for key, value in samples:
                self.counters.values[key] = value
            if failures:
                self.counters.errors += 1
                self.counters.last_error = '; '.join(failures)
            else:
                self.counters.successes += 1
                self.counters.last_success = now
                self.counters.last_success_ts = time.time()

        if failures:
            for failure in failures:
                logger.error(f"Metrics poll failed - {failure}")
            return False

        logger.debug(f"Metrics poll ok: {len(samples)} sample(s)")
        return True

    def snapshot(self):
        """Consistent copy of the counters"""
        with self._lock:
            return self.counters.snapshot()

    def get_status(self):
        """Snapshot for JSON; NaN and infinite samples are reported as None"""
        status = self.snapshot()
        status['values'] = {
            key: value if math.isfinite(value) else None
            for key, value in status['values'].items()
        }
        status.update({
            'running': self.running,
            'query_url': self.query_url,
            'queries': list(self.queries),
            'interval': self.interval
        })
        return status
