# clawheal — Docker Runtime Adapter
# Typed wrapper around the docker CLI: reachability, container state,
# start, and system prune.
# Created: 2026-10-12

from __future__ import annotations

import logging
import subprocess
from enum import Enum

logger = logging.getLogger(__name__)


class ContainerState(str, Enum):
    """Container status as reported by ``docker inspect``."""

    RUNNING = "running"
    CREATED = "created"
    RESTARTING = "restarting"
    PAUSED = "paused"
    EXITED = "exited"
    REMOVING = "removing"
    DEAD = "dead"
    MISSING = "missing"  # No container with that name
    UNKNOWN = "unknown"  # Inspect timed out or returned something unexpected

    @classmethod
    def parse(cls, raw: str) -> ContainerState:
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class DockerRuntime:
    """Run docker commands with a per-call timeout."""

    def __init__(
        self,
        binary: str = "docker",
        timeout: float = 30.0,
        prune_timeout: float = 300.0,
    ) -> None:
        self.binary = binary
        self.timeout = timeout
        self.prune_timeout = prune_timeout

    def is_reachable(self) -> bool:
        """True if the docker daemon answers ``docker info``."""
        result = self._run(["info"])
        return result is not None and result.returncode == 0

    def status(self, name: str) -> ContainerState:
        result = self._run(["inspect", name, "--format", "{{.State.Status}}"])
        if result is None:
            return ContainerState.UNKNOWN
        if result.returncode != 0:
            return ContainerState.MISSING
        return ContainerState.parse(result.stdout)

    def start(self, name: str) -> bool:
        result = self._run(["start", name])
        return result is not None and result.returncode == 0

    def prune(self) -> bool:
        result = self._run(["system", "prune", "-f"], timeout=self.prune_timeout)
        return result is not None and result.returncode == 0

    def _run(
        self, args: list[str], timeout: float | None = None
    ) -> subprocess.CompletedProcess[str] | None:
        cmd = [self.binary, *args]
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout or self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Timed out: %s", " ".join(cmd))
        except FileNotFoundError:
            logger.warning("%s not found on PATH", self.binary)
        return None
