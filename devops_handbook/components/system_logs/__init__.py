"""
System Logs Component
"""
from .routes import system_logs_bp, init_system_logs
from .service import SystemLogsService

__all__ = ['system_logs_bp', 'SystemLogsService', 'init_system_logs']
