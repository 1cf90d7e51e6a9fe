# clawheal — External collaborators
# Thin, typed adapters over docker, launchd/lsof, HTTP and the filesystem.
# Created: 2026-10-12

from clawheal.collaborators.docker import ContainerState, DockerRuntime
from clawheal.collaborators.filesystem import LocalFilesystem
from clawheal.collaborators.probe import NO_RESPONSE, GatewayProbe
from clawheal.collaborators.supervisor import LaunchdSupervisor

__all__ = [
    "NO_RESPONSE",
    "ContainerState",
    "DockerRuntime",
    "GatewayProbe",
    "LaunchdSupervisor",
    "LocalFilesystem",
]
