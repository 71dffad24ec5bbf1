"""
Metrics query response parsing
Understands the JSON shape of a Prometheus-style /api/v1/query response
"""
from typing import Dict, List, Tuple


class QueryResponseError(ValueError):
    """The metrics endpoint answered with something we cannot use"""


def series_key(metric: Dict[str, str], fallback_name: str) -> str:
    """Render a series as name{label="value",...} with labels sorted"""
    labels = dict(metric or {})
    name = labels.pop('__name__', None) or fallback_name
    if not labels:
        return name
    rendered = ','.join(f'{key}="{labels[key]}"' for key in sorted(labels))
    return f'{name}{{{rendered}}}'


def _sample_value(sample, query):
    try:
        return float(sample[1])
    except (TypeError, ValueError, IndexError) as e:
        raise QueryResponseError(f"Bad sample for '{query}': {sample!r}") from e


def parse_query_response(payload, query: str) -> List[Tuple[str, float]]:
    """Return (series key, value) pairs from a decoded response body"""
    if not isinstance(payload, dict):
        raise QueryResponseError(f"Response for '{query}' is not a JSON object")

    status = payload.get('status')
    if status != 'success':
        message = payload.get('error') or f'status={status!r}'
        raise QueryResponseError(f"Query '{query}' failed: {message}")

    data = payload.get('data')
    if not isinstance(data, dict):
        raise QueryResponseError(f"Response for '{query}' has no data")

    result_type = data.get('resultType')
    result = data.get('result')

    if result_type == 'vector':
        if not isinstance(result, list):
            raise QueryResponseError(f"Vector result for '{query}' is not a list")
        samples = []
        for item in result:
            if not isinstance(item, dict):
                raise QueryResponseError(f"Bad series for '{query}': {item!r}")
            key = series_key(item.get('metric'), query)
            samples.append((key, _sample_value(item.get('value'), query)))
        return samples

    if result_type == 'scalar':
        return [(query, _sample_value(result, query))]

    raise QueryResponseError(f"Unsupported result type for '{query}': {result_type!r}")
