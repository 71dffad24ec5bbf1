"""
Service Restarter Component
Restarts a service when a system metric crosses a threshold
"""
from .routes import service_restarter_bp, init_service_restarter, create_restarter
from .service import CheckResult, ThresholdRestarter, build_command

__all__ = [
    'service_restarter_bp',
    'init_service_restarter',
    'create_restarter',
    'CheckResult',
    'ThresholdRestarter',
    'build_command'
]
