"""
Tests for the metrics poller: response parsing, counters, exposition and endpoints.
Uses a fake session instead of the network.
"""

from __future__ import annotations

import pytest
import requests

from conftest import FakeResponse, FakeSession, vector_payload
from devops_handbook.components.metrics_exporter import (
    MetricsPoller,
    QueryResponseError,
    build_registry,
    parse_query_response,
    render_metrics,
    series_key,
)


def make_poller(session, queries=('up',)):
    return MetricsPoller('http://prom.test:9090/', list(queries), interval=5, timeout=2,
                         session=session)


def test_series_key_sorts_labels():
    assert series_key({'__name__': 'up', 'job': 'node', 'instance': 'a:9100'}, 'q') == \
        'up{instance="a:9100",job="node"}'
    assert series_key({}, 'sum(rate(x[5m]))') == 'sum(rate(x[5m]))'


def test_parse_vector_and_scalar():
    payload = vector_payload(({'__name__': 'up', 'job': 'api'}, 1), ({'__name__': 'up', 'job': 'db'}, 0))
    assert parse_query_response(payload, 'up') == [('up{job="api"}', 1.0), ('up{job="db"}', 0.0)]

    scalar = {'status': 'success', 'data': {'resultType': 'scalar', 'result': [1700000000, '42.5']}}
    assert parse_query_response(scalar, 'scalar(1)') == [('scalar(1)', 42.5)]


@pytest.mark.parametrize('payload, message', [
    ([], 'not a JSON object'),
    ({'status': 'error', 'error': 'parse error'}, 'parse error'),
    ({'status': 'success'}, 'has no data'),
    ({'status': 'success', 'data': {'resultType': 'matrix', 'result': []}}, 'Unsupported result type'),
    ({'status': 'success', 'data': {'resultType': 'vector', 'result': [{'metric': {}, 'value': [1]}]}},
     'Bad sample'),
])
def test_parse_rejects_bad_payloads(payload, message):
    with pytest.raises(QueryResponseError, match=message):
        parse_query_response(payload, 'up')


def test_poll_once_updates_counters():
    session = FakeSession({'up': FakeResponse(vector_payload(({'__name__': 'up', 'job': 'api'}, 1)))})
    poller = make_poller(session)

    assert poller.poll_once() is True
    url, params, timeout = session.calls[0]
    assert url == 'http://prom.test:9090/api/v1/query'
    assert params == {'query': 'up'}
    assert timeout == 2

    data = poller.snapshot()
    assert data['polls'] == 1
    assert data['successes'] == 1
    assert data['errors'] == 0
    assert data['values'] == {'up{job="api"}': 1.0}
    assert data['last_success_ts'] is not None


@pytest.mark.parametrize('session', [
    FakeSession(error=requests.ConnectionError('connection refused')),
    FakeSession({'up': FakeResponse(status_code=503)}),
    FakeSession({'up': FakeResponse(bad_json=True)}),
    FakeSession({'up': FakeResponse({'status': 'error', 'error': 'bad query'})}),
])
def test_poll_once_logs_and_continues_on_error(session, caplog):
    poller = make_poller(session)
    assert poller.poll_once() is False
    assert poller.poll_once() is False

    data = poller.snapshot()
    assert data['polls'] == 2
    assert data['errors'] == 2
    assert data['successes'] == 0
    assert data['last_error'].startswith('up: ')
    assert 'Metrics poll failed' in caplog.text


def test_partial_failure_keeps_good_values():
    session = FakeSession({
        'up': FakeResponse(vector_payload(({'__name__': 'up'}, 1))),
        'broken': FakeResponse(status_code=400),
    })
    poller = make_poller(session, queries=['up', 'broken'])
    assert poller.poll_once() is False
    data = poller.snapshot()
    assert data['values'] == {'up': 1.0}
    assert data['errors'] == 1
    assert 'broken' in data['last_error']


def test_values_persist_between_polls():
    session = FakeSession({'up': FakeResponse(vector_payload(({'__name__': 'up'}, 1)))})
    poller = make_poller(session)
    poller.poll_once()
    session.error = requests.Timeout('timed out')
    poller.poll_once()
    assert poller.snapshot()['values'] == {'up': 1.0}


def test_invalid_configuration():
    with pytest.raises(ValueError, match='positive'):
        MetricsPoller('http://x', ['up'], interval=0)
    with pytest.raises(ValueError, match='query'):
        MetricsPoller('http://x', ['  '], interval=1)


def test_start_and_stop_thread():
    session = FakeSession({'up': FakeResponse(vector_payload(({'__name__': 'up'}, 1)))})
    poller = make_poller(session)
    poller.start()
    assert poller.running
    poller.stop()
    assert not poller.running


def test_exposition_text():
    session = FakeSession({'up': FakeResponse(vector_payload(({'__name__': 'up', 'job': 'api'}, 1)))})
    poller = make_poller(session)
    poller.poll_once()

    text = render_metrics(build_registry(poller)).decode()
    assert 'handbook_exporter_polls_total 1.0' in text
    assert 'handbook_exporter_errors_total 0.0' in text
    assert 'handbook_exporter_last_success_timestamp' in text
    assert 'handbook_exporter_value{series="up{job=\\"api\\"}"} 1.0' in text


def test_metrics_endpoint(client, poller):
    poller.session = FakeSession({'up': FakeResponse(vector_payload(({'__name__': 'up'}, 1)))})

    resp = client.post('/api/exporter/poll')
    assert resp.status_code == 200
    assert resp.get_json()['ok'] is True

    resp = client.get('/metrics')
    assert resp.status_code == 200
    assert resp.mimetype == 'text/plain'
    assert 'handbook_exporter_value{series="up"} 1.0' in resp.get_data(as_text=True)


def test_exporter_status_endpoint(client, poller):
    poller.session = FakeSession(error=requests.ConnectionError('down'))
    client.post('/api/exporter/poll')

    data = client.get('/api/exporter/status').get_json()
    assert data['running'] is False
    assert data['query_url'] == 'http://prometheus.test:9090/api/v1/query'
    assert data['queries'] == ['up']
    assert data['errors'] == 1
    assert 'down' in data['last_error']


def test_status_reports_non_finite_values_as_null(client, poller):
    poller.session = FakeSession({'up': FakeResponse(vector_payload(
        ({'__name__': 'up', 'job': 'api'}, 'NaN'),
        ({'__name__': 'up', 'job': 'db'}, '+Inf'),
        ({'__name__': 'up', 'job': 'web'}, 1),
    ))})
    client.post('/api/exporter/poll')

    resp = client.get('/api/exporter/status')
    assert 'NaN' not in resp.get_data(as_text=True)
    assert resp.get_json()['values'] == {
        'up{job="api"}': None,
        'up{job="db"}': None,
        'up{job="web"}': 1.0,
    }
