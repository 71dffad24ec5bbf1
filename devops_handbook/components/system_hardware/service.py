"""
System Hardware Service
psutil readings for the hardware panel and for threshold checks
"""
import logging
import platform
from datetime import datetime

import psutil

from .. import register_component

logger = logging.getLogger(__name__)


def _cpu_percent(disk_path='/'):
    return psutil.cpu_percent(interval=1)


def _memory_percent(disk_path='/'):
    return psutil.virtual_memory().percent


def _disk_percent(disk_path='/'):
    return psutil.disk_usage(disk_path).percent


def _swap_percent(disk_path='/'):
    return psutil.swap_memory().percent


# Percent-valued system metrics that a threshold can be set on
METRIC_SAMPLERS = {
    'cpu': _cpu_percent,
    'memory': _memory_percent,
    'disk': _disk_percent,
    'swap': _swap_percent
}


def sample_metric(name, disk_path='/'):
    """Current value of one named metric, in percent"""
    try:
        sampler = METRIC_SAMPLERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown metric '{name}', expected one of {sorted(METRIC_SAMPLERS)}"
        ) from None
    return float(sampler(disk_path))


@register_component('system_hardware')
class SystemHardwareService:
    """Service for System Hardware component"""

    def __init__(self, disk_path='/'):
        self.disk_path = disk_path

    def get_hardware_info(self):
        """Get system hardware information"""
        try:
            frequency = psutil.cpu_freq()
            cpu_info = {
                'name': platform.processor() or 'Unknown CPU',
                'cores': psutil.cpu_count(logical=False),
                'threads': psutil.cpu_count(logical=True),
                'usage': psutil.cpu_percent(interval=1),
                'frequency': frequency._asdict() if frequency else None
            }

            memory = psutil.virtual_memory()
            memory_info = {
                'total': memory.total // 1024 // 1024,  # MB
                'available': memory.available // 1024 // 1024,  # MB
                'used': memory.used // 1024 // 1024,  # MB
                'percent': memory.percent
            }

            disk = psutil.disk_usage(self.disk_path)
            disk_info = {
                'path': self.disk_path,
                'total': disk.total // 1024 // 1024 // 1024,  # GB
                'used': disk.used // 1024 // 1024 // 1024,  # GB
                'free': disk.free // 1024 // 1024 // 1024,  # GB
                'percent': disk.percent
            }

            system_info = {
                'platform': platform.system(),
                'platform_release': platform.release(),
                'architecture': platform.machine(),
                'hostname': platform.node(),
                'boot_time': datetime.fromtimestamp(psutil.boot_time()).isoformat()
            }

            return {
                'cpu': cpu_info,
                'memory': memory_info,
                'disk': disk_info,
                'system': system_info,
                'timestamp': datetime.now().isoformat()
            }

        except Exception as e:
            logger.error(f"Failed to read hardware info: {e}")
            return {'error': str(e)}
