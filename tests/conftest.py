# Shared fixtures for clawheal tests
# Created: 2026-10-12

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from clawheal.checks.base import HealContext
from clawheal.collaborators import (
    ContainerState,
    DockerRuntime,
    GatewayProbe,
    LaunchdSupervisor,
    LocalFilesystem,
)
from clawheal.config import Settings
from clawheal.heal_log import HealLog


@pytest.fixture
def settings(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    return Settings(home=home, log_archive_roots=[tmp_path / "var-log", home / ".openclaw"])


@pytest.fixture
def ctx(settings):
    """A context where everything is healthy until a test says otherwise."""
    docker = MagicMock(spec=DockerRuntime)
    docker.is_reachable.return_value = True
    docker.status.return_value = ContainerState.RUNNING
    docker.start.return_value = True
    docker.prune.return_value = True

    supervisor = MagicMock(spec=LaunchdSupervisor)
    supervisor.pid_on_port.return_value = None
    supervisor.kickstart.return_value = True
    supervisor.terminate.return_value = True
    supervisor.is_alive.return_value = False

    probe = MagicMock(spec=GatewayProbe)
    probe.probe.return_value = 200

    fs = MagicMock(spec=LocalFilesystem)
    fs.usage_percent.return_value = 50
    fs.find.return_value = []
    fs.remove.return_value = True
    fs.read_first_line.return_value = ""

    return HealContext(
        settings=settings,
        log=HealLog(settings.heal_log_path, settings.heal_history_path),
        docker=docker,
        supervisor=supervisor,
        probe=probe,
        fs=fs,
        sleep=MagicMock(),
        clock=lambda: 0.0,
    )
