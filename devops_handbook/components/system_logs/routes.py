"""
System Logs Component Routes
"""

from flask import Blueprint, jsonify, request

from .. import attach_component_service, get_component_service
from .service import SystemLogsService

system_logs_bp = Blueprint('system_logs', __name__)


@system_logs_bp.route('/api/logs')
def api_logs():
    """Get system logs with filtering"""
    level_filter = request.args.get('level', 'ALL')
    try:
        limit = int(request.args.get('limit', 50))
    except ValueError:
        return jsonify({'error': 'limit must be an integer'}), 400
    if limit < 0:
        return jsonify({'error': 'limit must not be negative'}), 400

    try:
        logs = get_component_service('system_logs').get_logs(level_filter=level_filter, limit=limit)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify(logs)


@system_logs_bp.route('/api/logs/summary')
def api_logs_summary():
    return jsonify(get_component_service('system_logs').counts_by_level())


def init_system_logs(app):
    """Initialize System Logs component with Flask app"""
    attach_component_service(app, 'system_logs', SystemLogsService())
    app.register_blueprint(system_logs_bp)
    return system_logs_bp
