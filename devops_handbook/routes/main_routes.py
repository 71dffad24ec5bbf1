"""
Main routes for the handbook service
"""
from datetime import datetime

from flask import Blueprint, current_app, jsonify

from .. import __version__
from ..components import registry

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Components and their endpoints"""
    endpoints = [
        {
            'rule': rule.rule,
            'methods': sorted(rule.methods - {'HEAD', 'OPTIONS'}),
            'component': rule.endpoint.split('.')[0]
        }
        for rule in sorted(current_app.url_map.iter_rules(), key=lambda r: r.rule)
        if rule.endpoint != 'static'
    ]

    return jsonify({
        'name': 'DevOps Interview Handbook',
        'version': __version__,
        'components': sorted(registry.get_all_components()),
        'endpoints': endpoints,
        'current_time': datetime.now().isoformat()
    })


@main_bp.route('/health')
def health():
    return jsonify({'status': 'healthy', 'version': __version__})
