"""
System Hardware Routes
"""

from flask import Blueprint, jsonify

from .. import attach_component_service, get_component_service
from .service import SystemHardwareService

system_hardware_bp = Blueprint('system_hardware', __name__)


@system_hardware_bp.route('/api/system/hardware')
def api_system_hardware():
    """Get system hardware information"""
    hardware_info = get_component_service('system_hardware').get_hardware_info()
    if 'error' in hardware_info:
        return jsonify(hardware_info), 503
    return jsonify(hardware_info)


def init_system_hardware(app):
    """Initialize system hardware component with Flask app"""
    attach_component_service(app, 'system_hardware',
                             SystemHardwareService(app.config['RESTARTER_DISK_PATH']))
    app.register_blueprint(system_hardware_bp)
    return system_hardware_bp
