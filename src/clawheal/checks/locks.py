# clawheal — Check 4: Stale lock files
# Old *.lock files are removed unless their recorded owner pid is alive.
# Created: 2026-10-12

from __future__ import annotations

import re
from datetime import timedelta

from clawheal import console
from clawheal.checks.base import CheckOutcome, HealContext
from clawheal.heal_log import HealResult

NAME = "Stale locks"

_PID_RE = re.compile(r"^[0-9]+$")
# pid_t upper bound; anything larger cannot name a live owner
_MAX_PID = 2**31 - 1


def check_locks(ctx: HealContext) -> CheckOutcome:
    """Remove lock files older than the max age whose owner is gone."""
    console.check("Stale lock files...")
    start = ctx.clock()
    max_age = ctx.settings.lock_max_age_minutes

    candidates = ctx.fs.find([ctx.settings.lock_dir], "*.lock", timedelta(minutes=max_age))
    if not candidates:
        console.ok("No stale lock files found.")
        return CheckOutcome(NAME, True)

    count = len(candidates)
    console.warn(f"Found {count} stale lock file(s) older than {max_age} minutes.")

    removed = 0
    failed = 0
    for lockfile in candidates:
        first_line = ctx.fs.read_first_line(lockfile)
        if _PID_RE.match(first_line):
            pid = int(first_line)
            if 0 < pid <= _MAX_PID and ctx.supervisor.is_alive(pid):
                console.skip(f"{lockfile} — owning PID {pid} is still alive.")
                continue

        console.heal(f"Removing stale lock: {lockfile}")
        if ctx.fs.remove(lockfile):
            removed += 1
        else:
            failed += 1

    if removed + failed == 0:
        console.ok("All old lock files are held by live processes.")
        return CheckOutcome(NAME, True)

    duration = ctx.elapsed_ms(start)
    diagnosis = f"found {count} lock files older than {max_age}min"
    verify = f"{removed} removed, {failed} failed"

    if failed == 0:
        console.ok(f"Removed {removed} stale lock file(s).")
        entry = ctx.record("stale_locks", diagnosis, "removed stale locks",
                           HealResult.SUCCESS, verify, duration)
        return CheckOutcome(NAME, True, entry)

    console.warn(f"Removed {removed}, failed to remove {failed} lock file(s).")
    entry = ctx.record("stale_locks", diagnosis, "removed stale locks",
                       HealResult.PARTIAL, verify, duration)
    return CheckOutcome(NAME, False, entry)
