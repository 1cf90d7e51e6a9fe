# clawheal — launchd Supervisor Adapter
# Port ownership (lsof), process termination and liveness, and
# `launchctl kickstart` for the gateway LaunchAgent.
# Created: 2026-10-12

from __future__ import annotations

import logging
import os
import signal
import subprocess

logger = logging.getLogger(__name__)


class LaunchdSupervisor:
    """Process-level operations against the local macOS user session."""

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    def pid_on_port(self, port: int) -> int | None:
        """First pid listening on ``port``, or None if nothing is bound."""
        try:
            result = subprocess.run(
                ["lsof", "-ti", f":{port}"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError) as exc:
            logger.warning("lsof failed for port %d: %s", port, exc)
            return None

        for line in result.stdout.splitlines():
            line = line.strip()
            if line.isdigit():
                return int(line)
        return None

    def terminate(self, pid: int) -> bool:
        """Send SIGTERM. Returns False if the process is gone or not ours."""
        try:
            os.kill(pid, signal.SIGTERM)
            return True
        except (ProcessLookupError, PermissionError) as exc:
            logger.warning("Could not terminate pid %d: %s", pid, exc)
            return False

    def kickstart(self, label: str) -> bool:
        """``launchctl kickstart -k gui/<uid>/<label>``"""
        target = f"gui/{os.getuid()}/{label}"
        try:
            result = subprocess.run(
                ["launchctl", "kickstart", "-k", target],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError) as exc:
            logger.warning("launchctl kickstart %s failed: %s", target, exc)
            return False
        if result.returncode != 0:
            logger.warning("launchctl kickstart %s exited %d: %s", target,
                           result.returncode, result.stderr.strip())
        return result.returncode == 0

    def is_alive(self, pid: int) -> bool:
        """Signal-0 liveness probe. A process owned by another user counts as alive.

        Pids outside the valid range (0, negatives, overflowing values) are never alive;
        signal 0 to pid 0 would target our own process group.
        """
        if pid <= 0:
            return False
        try:
            os.kill(pid, 0)
            return True
        except PermissionError:
            return True
        except (ProcessLookupError, OSError, OverflowError, ValueError):
            return False
