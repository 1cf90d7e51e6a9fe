# clawheal — Check 1: Neo4j container
# Restart a stopped container once; escalate a missing one.
# Created: 2026-10-12

from __future__ import annotations

import logging

from clawheal import console
from clawheal.checks.base import CheckOutcome, HealContext
from clawheal.collaborators import ContainerState
from clawheal.heal_log import HealResult

logger = logging.getLogger(__name__)

NAME = "Neo4j container"


def check_container(ctx: HealContext) -> CheckOutcome:
    """Ensure the graph-database container is running."""
    console.check("Neo4j container status...")
    start = ctx.clock()
    name = ctx.settings.container_name

    # Docker Desktop may simply not be open yet: not a Neo4j failure
    if not ctx.docker.is_reachable():
        console.warn("Docker daemon not reachable — cannot check Neo4j. Skipping.")
        entry = ctx.record(
            "docker_unreachable",
            "docker daemon not responding",
            "skip",
            HealResult.SKIPPED,
            "cannot reach docker",
            0,
        )
        return CheckOutcome(NAME, True, entry)

    status = ctx.docker.status(name)
    if status is ContainerState.RUNNING:
        console.ok("Neo4j container is running.")
        return CheckOutcome(NAME, True)

    if status is ContainerState.MISSING:
        # Possibly removed on purpose; leave it to a human
        console.warn("Neo4j container not found. It may need to be created manually.")
        entry = ctx.record(
            f"{name}_missing",
            "container does not exist",
            "skip",
            HealResult.ESCALATE,
            "manual creation needed",
            ctx.elapsed_ms(start),
        )
        return CheckOutcome(NAME, True, entry)

    if status is ContainerState.UNKNOWN:
        # Inspect timed out or answered oddly: treat as not running
        logger.warning("Could not read state of %s; treating it as not running", name)
        console.warn("Could not read Neo4j container state; treating it as not running.")

    console.heal(f"Neo4j container status: {status.value}. Attempting restart...")
    if not ctx.docker.start(name):
        logger.warning("docker start %s returned non-zero", name)
    settle = ctx.settings.container_settle_seconds
    console.wait(f"Waiting {settle:g} seconds for Neo4j to initialize...")
    ctx.sleep(settle)

    new_status = ctx.docker.status(name)
    action = f"docker start {name}"
    if new_status is ContainerState.RUNNING:
        console.ok("Neo4j restarted successfully.")
        entry = ctx.record(
            f"{name}_down",
            f"container was {status.value}",
            action,
            HealResult.SUCCESS,
            "container now running",
            ctx.elapsed_ms(start),
        )
        return CheckOutcome(NAME, True, entry)

    console.fail(f"Neo4j restart failed. Status: {new_status.value}")
    entry = ctx.record(
        f"{name}_down",
        f"container was {status.value}",
        action,
        HealResult.FAILED,
        f"status after restart: {new_status.value}",
        ctx.elapsed_ms(start),
    )
    return CheckOutcome(NAME, False, entry)
