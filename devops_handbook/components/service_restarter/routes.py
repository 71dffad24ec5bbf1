"""
Service Restarter API Routes
"""
import logging

from flask import Blueprint, jsonify

from .. import attach_component_service, get_component_service
from .service import ThresholdRestarter, build_command

logger = logging.getLogger(__name__)

service_restarter_bp = Blueprint('service_restarter', __name__)


@service_restarter_bp.route('/api/restarter/status')
def api_restarter_status():
    return jsonify(get_component_service('service_restarter').get_status())


@service_restarter_bp.route('/api/restarter/check', methods=['POST'])
def api_restarter_check():
    """Run one threshold check now"""
    result = get_component_service('service_restarter').check_once()
    return jsonify(result.to_dict())


def create_restarter(config):
    return ThresholdRestarter(
        metric=config['RESTARTER_METRIC'],
        threshold=config['RESTARTER_THRESHOLD'],
        command=build_command(config['RESTARTER_COMMAND'], config['RESTARTER_SERVICE']),
        interval=config['RESTARTER_INTERVAL'],
        command_timeout=config['RESTARTER_COMMAND_TIMEOUT'],
        dry_run=config['RESTARTER_DRY_RUN'],
        cooldown=config['RESTARTER_COOLDOWN'],
        disk_path=config['RESTARTER_DISK_PATH'],
        history_size=config['MAX_RESTART_HISTORY']
    )


def init_service_restarter(app):
    """Initialize service restarter component with Flask app"""
    attach_component_service(app, 'service_restarter', create_restarter(app.config))
    app.register_blueprint(service_restarter_bp)
    logger.debug("Service Restarter component initialized")
    return service_restarter_bp
