# clawheal — Self-Heal Runner
# Runs the four checkers in a fixed order and folds their outcomes into a
# single pass/fail result for the process exit code.
# Created: 2026-10-12

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from clawheal import console
from clawheal.checks import (
    CheckOutcome,
    HealContext,
    check_container,
    check_disk,
    check_gateway,
    check_locks,
)
from clawheal.heal_log import HealLogEntry, timestamp

logger = logging.getLogger(__name__)

Checker = Callable[[HealContext], CheckOutcome]

ALL_CHECKS: list[tuple[str, Checker]] = [
    ("Neo4j container", check_container),
    ("Gateway", check_gateway),
    ("Disk space", check_disk),
    ("Stale locks", check_locks),
]


@dataclass
class RunReport:
    """Outcomes of one run, in execution order."""

    outcomes: list[CheckOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(o.healthy for o in self.outcomes)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    @property
    def entries(self) -> list[HealLogEntry]:
        return [o.entry for o in self.outcomes if o.entry is not None]


class SelfHealRunner:
    """Sequential driver. Never skips a checker because an earlier one failed."""

    def __init__(
        self,
        ctx: HealContext,
        checks: list[tuple[str, Checker]] | None = None,
    ) -> None:
        self.ctx = ctx
        self.checks = checks if checks is not None else ALL_CHECKS

    def run(self) -> RunReport:
        self.ctx.log.ensure()

        console.banner(f"OpenClaw Self-Heal — {timestamp()}")
        print()

        report = RunReport()
        for label, check_fn in self.checks:
            report.outcomes.append(self._run_one(label, check_fn))
            print()

        if report.ok:
            console.banner("RESULT: All checks passed or healed.")
            logger.info("Self-heal run passed (%d entries logged)", len(report.entries))
        else:
            console.banner(
                "RESULT: One or more issues could not be resolved.",
                f"Check {self.ctx.log.log_path} for details.",
            )
            failed = [o.name for o in report.outcomes if not o.healthy]
            logger.warning("Self-heal run failed: %s", ", ".join(failed))

        return report

    def _run_one(self, label: str, check_fn: Checker) -> CheckOutcome:
        try:
            return check_fn(self.ctx)
        except Exception as e:
            logger.exception("Checker %s crashed", label)
            console.fail(f"{label} check crashed: {e}")
            return CheckOutcome(label, False)
