# clawheal — Check plumbing
# HealContext bundles settings, the heal log and the collaborators a checker
# needs; CheckOutcome is what every checker hands back to the runner.
# Created: 2026-10-12

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from clawheal.collaborators import (
    DockerRuntime,
    GatewayProbe,
    LaunchdSupervisor,
    LocalFilesystem,
)
from clawheal.config import Settings
from clawheal.heal_log import HealLog, HealLogEntry, HealResult


@dataclass
class CheckOutcome:
    """Result of one checker run."""

    name: str
    healthy: bool
    entry: HealLogEntry | None = None


@dataclass
class HealContext:
    """Everything a checker touches. Swap any collaborator for a fake in tests."""

    settings: Settings
    log: HealLog
    docker: DockerRuntime
    supervisor: LaunchdSupervisor
    probe: GatewayProbe
    fs: LocalFilesystem
    sleep: Callable[[float], None] = time.sleep
    clock: Callable[[], float] = time.monotonic

    @classmethod
    def from_settings(cls, settings: Settings) -> HealContext:
        return cls(
            settings=settings,
            log=HealLog(settings.heal_log_path, settings.heal_history_path),
            docker=DockerRuntime(
                timeout=settings.command_timeout,
                prune_timeout=settings.prune_timeout,
            ),
            supervisor=LaunchdSupervisor(timeout=settings.command_timeout),
            probe=GatewayProbe(settings.gateway_url, timeout=settings.gateway_timeout),
            fs=LocalFilesystem(),
        )

    def elapsed_ms(self, start: float) -> int:
        return max(0, int((self.clock() - start) * 1000))

    def record(
        self,
        issue: str,
        diagnosis: str,
        action: str,
        result: HealResult,
        verify: str = "",
        duration_ms: int = 0,
    ) -> HealLogEntry:
        """Build an entry, append it to the heal log, and return it."""
        entry = HealLogEntry.create(
            issue=issue,
            diagnosis=diagnosis,
            action=action,
            result=result,
            verify=verify,
            duration_ms=duration_ms,
        )
        self.log.append(entry)
        return entry
