# clawheal — Check 3: Disk space
# Above the trigger threshold, run the cleanup steps in order, then re-measure
# against the stricter recovery target.
# Created: 2026-10-12

from __future__ import annotations

import logging
from datetime import timedelta

from clawheal import console
from clawheal.checks.base import CheckOutcome, HealContext
from clawheal.heal_log import HealResult

logger = logging.getLogger(__name__)

NAME = "Disk space"
CLEANUP_ACTION = "cleanup (logs, sessions, docker prune)"


def _remove_compressed_logs(ctx: HealContext) -> None:
    files = ctx.fs.find(ctx.settings.archive_roots, "*.log.gz")
    if not files:
        return
    console.heal(f"Removing {len(files)} compressed log files...")
    for path in files:
        ctx.fs.remove(path)


def _remove_old_sessions(ctx: HealContext) -> None:
    days = ctx.settings.session_max_age_days
    files = ctx.fs.find([ctx.settings.sessions_dir], "*.jsonl", timedelta(days=days))
    if not files:
        return
    console.heal(f"Removing {len(files)} session files older than {days} days...")
    for path in files:
        ctx.fs.remove(path)


def _prune_docker(ctx: HealContext) -> None:
    if not ctx.docker.is_reachable():
        return
    console.heal("Running docker system prune...")
    if not ctx.docker.prune():
        logger.warning("docker system prune did not complete cleanly")


# Order is policy: cheapest, least destructive first
CLEANUP_STEPS = (
    ("compressed logs", _remove_compressed_logs),
    ("old sessions", _remove_old_sessions),
    ("docker prune", _prune_docker),
)


def check_disk(ctx: HealContext) -> CheckOutcome:
    """Keep root filesystem usage below the trigger threshold."""
    console.check("Disk space...")
    start = ctx.clock()
    settings = ctx.settings
    threshold = settings.disk_threshold
    target = settings.disk_recovery_target

    usage = ctx.fs.usage_percent(settings.disk_path)
    if usage < threshold:
        console.ok(f"Disk usage at {usage}% (threshold: {threshold}%).")
        return CheckOutcome(NAME, True)

    console.warn(f"Disk usage at {usage}% (>= {threshold}%). Attempting cleanup...")

    for label, step in CLEANUP_STEPS:
        try:
            step(ctx)
        except OSError as exc:
            logger.warning("Cleanup step '%s' failed: %s", label, exc)
            console.warn(f"Cleanup step '{label}' failed: {exc}")

    new_usage = ctx.fs.usage_percent(settings.disk_path)
    duration = ctx.elapsed_ms(start)

    if new_usage < target:
        console.ok(f"Disk usage reduced to {new_usage}% (target: <{target}%).")
        entry = ctx.record("disk_high", f"usage was {usage}%", CLEANUP_ACTION,
                           HealResult.SUCCESS, f"usage now {new_usage}%", duration)
        return CheckOutcome(NAME, True, entry)

    console.warn(
        f"Disk usage still at {new_usage}% after cleanup (target: <{target}%). "
        "Escalation needed."
    )
    entry = ctx.record(
        "disk_high",
        f"usage was {usage}%",
        CLEANUP_ACTION,
        HealResult.PARTIAL,
        f"usage now {new_usage}%, still above {target}%",
        duration,
    )
    # Between target and threshold is degraded, not failed
    return CheckOutcome(NAME, new_usage < threshold, entry)
