"""
Pytest fixtures for handbook tests. Background pollers stay off and no test
touches the network or real process control.
"""

from __future__ import annotations

import pytest
import requests

SAMPLE_GUIDE = """\
# Sample Guide

Intro text that is not part of any question.

## Basics

### 1. What is CI?

- Merge often.
- Build and test every change.

### Q2: Show a restart command

```bash
systemctl restart nginx
```

## Extras

### Why use containers?

Lighter than virtual machines.

#### Details

Namespaces and cgroups.

### 3. An empty one
"""


class FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    """Stands in for requests.Session; responses keyed by query expression"""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.responses[params['query']]


def vector_payload(*series):
    """Build a Prometheus vector response from (labels, value) pairs"""
    return {
        'status': 'success',
        'data': {
            'resultType': 'vector',
            'result': [
                {'metric': labels, 'value': [1700000000.0, str(value)]}
                for labels, value in series
            ]
        }
    }


@pytest.fixture
def guide_file(tmp_path):
    path = tmp_path / 'guide.md'
    path.write_text(SAMPLE_GUIDE, encoding='utf-8')
    return path


@pytest.fixture
def app(guide_file):
    from devops_handbook.handbook_app import HandbookApp

    handbook = HandbookApp({
        'GUIDE_PATH': str(guide_file),
        'START_POLLERS': False,
        'RATELIMIT_ENABLED': False,
        'EXPORTER_BASE_URL': 'http://prometheus.test:9090/',
        'EXPORTER_QUERIES': ['up'],
        'RESTARTER_METRIC': 'memory',
        'RESTARTER_THRESHOLD': 80.0,
        'RESTARTER_COMMAND': 'systemctl restart demo',
        'RESTARTER_DRY_RUN': False,
        'RESTARTER_COOLDOWN': 0,
        'TESTING': True
    })
    return handbook.create_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def poller(app):
    return app.extensions['handbook']['metrics_exporter']


@pytest.fixture
def restarter(app):
    return app.extensions['handbook']['service_restarter']
