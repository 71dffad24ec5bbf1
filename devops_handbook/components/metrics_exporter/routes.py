"""
Metrics Exporter API Routes
"""
import logging

from flask import Blueprint, Response, jsonify
from prometheus_client import CONTENT_TYPE_LATEST

from .. import attach_component_service, get_component_service
from .exposition import build_registry, render_metrics
from .service import MetricsPoller

logger = logging.getLogger(__name__)

metrics_exporter_bp = Blueprint('metrics_exporter', __name__)


@metrics_exporter_bp.route('/metrics')
def prometheus_metrics():
    """Poller counters in Prometheus text format"""
    registry = get_component_service('metrics_registry')
    return Response(render_metrics(registry), content_type=CONTENT_TYPE_LATEST)


@metrics_exporter_bp.route('/api/exporter/status')
def api_exporter_status():
    return jsonify(get_component_service('metrics_exporter').get_status())


@metrics_exporter_bp.route('/api/exporter/poll', methods=['POST'])
def api_exporter_poll():
    """Run one poll now, outside the regular interval"""
    poller = get_component_service('metrics_exporter')
    ok = poller.poll_once()
    status = poller.get_status()
    status['ok'] = ok
    return jsonify(status)


def create_poller(config):
    return MetricsPoller(
        base_url=config['EXPORTER_BASE_URL'],
        queries=config['EXPORTER_QUERIES'],
        interval=config['EXPORTER_INTERVAL'],
        timeout=config['EXPORTER_TIMEOUT']
    )


def init_metrics_exporter(app):
    """Initialize metrics exporter component with Flask app"""
    poller = attach_component_service(app, 'metrics_exporter', create_poller(app.config))
    attach_component_service(app, 'metrics_registry', build_registry(poller))
    app.register_blueprint(metrics_exporter_bp)
    logger.debug("Metrics Exporter component initialized")
    return metrics_exporter_bp
