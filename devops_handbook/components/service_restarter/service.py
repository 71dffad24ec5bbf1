"""
Threshold Restarter Service
Every interval: sample one system metric and, when it is above the threshold,
run the configured process-control command. Errors are logged and the next
interval proceeds as normal.
"""
import logging
import shlex
import subprocess
import threading
import time
from collections import deque
from datetime import datetime

from .. import register_component
from ..system_hardware.service import METRIC_SAMPLERS, sample_metric

logger = logging.getLogger(__name__)

ACTION_NONE = 'none'
ACTION_RESTARTED = 'restarted'
ACTION_FAILED = 'failed'
ACTION_SKIPPED = 'skipped'
ACTION_DRY_RUN = 'dry_run'


def build_command(command, service):
    """Command argv from a configured string/list, defaulting to systemctl restart"""
    if isinstance(command, str):
        command = shlex.split(command)
    if command:
        return list(command)
    if not service:
        raise ValueError("Either a restart command or a service name is required")
    return ['systemctl', 'restart', service]


class CheckResult:
    """Outcome of one threshold check"""
    def __init__(self, metric, value, threshold, exceeded, action, message=''):
        self.metric = metric
        self.value = value
        self.threshold = threshold
        self.exceeded = exceeded
        self.action = action
        self.message = message
        self.timestamp = datetime.now().isoformat()

    def to_dict(self):
        return {
            'timestamp': self.timestamp,
            'metric': self.metric,
            'value': self.value,
            'threshold': self.threshold,
            'exceeded': self.exceeded,
            'action': self.action,
            'message': self.message
        }


@register_component('service_restarter')
class ThresholdRestarter:
    """Restarts a service whenever a sampled metric goes above a threshold"""

    def __init__(self, metric, threshold, command, interval=60, command_timeout=30,
                 dry_run=False, cooldown=0, disk_path='/', history_size=50, sampler=None):
        if metric not in METRIC_SAMPLERS:
            raise ValueError(
                f"Unknown metric '{metric}', expected one of {sorted(METRIC_SAMPLERS)}"
            )
        if interval <= 0:
            raise ValueError(f"Check interval must be positive, got {interval}")
        if not command:
            raise ValueError("Restart command must not be empty")

        self.metric = metric
        self.threshold = float(threshold)
        self.command = list(command)
        self.interval = interval
        self.command_timeout = command_timeout
        self.dry_run = dry_run
        self.cooldown = cooldown
        self.disk_path = disk_path
        self.sampler = sampler or (lambda: sample_metric(self.metric, self.disk_path))

        self.history = deque(maxlen=history_size)
        self.checks = 0
        self.restarts = 0
        self.failures = 0
        self._last_restart = None
        self._lock = threading.Lock()
        self._restart_lock = threading.Lock()
        self._stop_event = threading.Event()
        self.thread = None

    @property
    def running(self):
        return self.thread is not None and self.thread.is_alive()

    def start(self):
        """Start checking thread"""
        if self.running:
            return
        self._stop_event.clear()
        self.thread = threading.Thread(target=self._check_loop, name='threshold-restarter', daemon=True)
        self.thread.start()
        logger.info(
            f"Restarter started: {self.metric} > {self.threshold} runs "
            f"'{' '.join(self.command)}' (every {self.interval}s)"
        )

    def stop(self, timeout=2):
        """Stop checking thread"""
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout=timeout)
        logger.info("Restarter stopped")

    def run_forever(self):
        """Check in the calling thread until stop() is called"""
        self._stop_event.clear()
        self._check_loop()

    def _check_loop(self):
        while not self._stop_event.is_set():
            self.check_once()
            self._stop_event.wait(self.interval)

    def _in_cooldown(self):
        if not self.cooldown or self._last_restart is None:
            return False
        return time.monotonic() - self._last_restart < self.cooldown

    def _run_command(self):
        """Run the restart command; returns (action, message)"""
        try:
            completed = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                timeout=self.command_timeout
            )
        except (OSError, subprocess.SubprocessError) as e:
            return ACTION_FAILED, f"Restart command failed: {e}"

        if completed.returncode != 0:
            detail = (completed.stderr or completed.stdout or '').strip()
            return ACTION_FAILED, f"Restart command exited {completed.returncode}: {detail}"
        return ACTION_RESTARTED, f"Ran '{' '.join(self.command)}'"

    def _restart(self):
        """Cooldown check and command run as one step; concurrent checks queue here"""
        with self._restart_lock:
            if self._in_cooldown():
                return ACTION_SKIPPED, f"Within {self.cooldown}s cooldown of the last restart"
            if self.dry_run:
                self._last_restart = time.monotonic()
                return ACTION_DRY_RUN, f"Would run '{' '.join(self.command)}'"

            action, message = self._run_command()
            if action == ACTION_RESTARTED:
                self._last_restart = time.monotonic()
            return action, message

    def check_once(self):
        """Run one check; never raises"""
        try:
            value = float(self.sampler())
        except Exception as e:
            logger.error(f"Failed to sample {self.metric}: {e}")
            return self._record(CheckResult(
                self.metric, None, self.threshold, False, ACTION_FAILED, f"Sampling failed: {e}"
            ))

        exceeded = value > self.threshold
        if not exceeded:
            return self._record(CheckResult(self.metric, value, self.threshold, False, ACTION_NONE))

        logger.warning(f"{self.metric} at {value:.1f}% is above threshold {self.threshold:.1f}%")

        action, message = self._restart()

        if action == ACTION_FAILED:
            logger.error(message)
        else:
            logger.info(message)

        return self._record(CheckResult(self.metric, value, self.threshold, True, action, message))

    def _record(self, result):
        with self._lock:
            self.checks += 1
            if result.action == ACTION_RESTARTED:
                self.restarts += 1
            elif result.action == ACTION_FAILED:
                self.failures += 1
            self.history.append(result)
        return result

    def get_status(self):
        with self._lock:
            history = [result.to_dict() for result in self.history]
            counts = {'checks': self.checks, 'restarts': self.restarts, 'failures': self.failures}
        status = {
            'running': self.running,
            'metric': self.metric,
            'threshold': self.threshold,
            'command': list(self.command),
            'interval': self.interval,
            'dry_run': self.dry_run,
            'cooldown': self.cooldown,
            'history': history
        }
        status.update(counts)
        return status
