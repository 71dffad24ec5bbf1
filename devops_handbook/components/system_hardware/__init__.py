"""
System Hardware Component
CPU, memory and disk readings via psutil
"""

from .routes import system_hardware_bp, init_system_hardware
from .service import METRIC_SAMPLERS, SystemHardwareService, sample_metric

__all__ = [
    'system_hardware_bp',
    'init_system_hardware',
    'SystemHardwareService',
    'METRIC_SAMPLERS',
    'sample_metric'
]
