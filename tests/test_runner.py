# Tests for clawheal/runner.py
# Created: 2026-10-12

from __future__ import annotations

import json
import os
import time

from clawheal.checks.base import CheckOutcome
from clawheal.collaborators import NO_RESPONSE, ContainerState, LocalFilesystem
from clawheal.heal_log import HealResult
from clawheal.runner import ALL_CHECKS, RunReport, SelfHealRunner


class TestRunReport:
    def test_empty_report_passes(self):
        assert RunReport().exit_code == 0

    def test_any_unhealthy_fails(self):
        report = RunReport([CheckOutcome("a", True), CheckOutcome("b", False)])
        assert report.ok is False
        assert report.exit_code == 1


class TestSequencing:
    def test_fixed_order(self):
        assert [label for label, _ in ALL_CHECKS] == [
            "Neo4j container", "Gateway", "Disk space", "Stale locks",
        ]

    def test_failure_does_not_skip_later_checks(self, ctx):
        seen = []

        def failing(c):
            seen.append("first")
            return CheckOutcome("first", False)

        def passing(c):
            seen.append("second")
            return CheckOutcome("second", True)

        report = SelfHealRunner(ctx, [("first", failing), ("second", passing)]).run()

        assert seen == ["first", "second"]
        assert report.exit_code == 1

    def test_crashing_checker_is_contained(self, ctx, capsys):
        def boom(c):
            raise RuntimeError("unexpected")

        def passing(c):
            return CheckOutcome("after", True)

        report = SelfHealRunner(ctx, [("boom", boom), ("after", passing)]).run()

        assert [o.name for o in report.outcomes] == ["boom", "after"]
        assert report.exit_code == 1
        assert "[FAIL] boom check crashed" in capsys.readouterr().out

    def test_initializes_heal_log(self, ctx, settings):
        SelfHealRunner(ctx, []).run()
        assert settings.heal_log_path.read_text() == "[]"

    def test_banner_and_result(self, ctx, capsys):
        SelfHealRunner(ctx).run()
        out = capsys.readouterr().out
        assert "OpenClaw Self-Heal" in out
        assert "RESULT: All checks passed or healed." in out


class TestEndToEnd:
    def test_all_healthy_logs_nothing(self, ctx, settings):
        report = SelfHealRunner(ctx).run()
        assert report.exit_code == 0
        assert json.loads(settings.heal_log_path.read_text()) == []

    def test_stopped_container_only(self, ctx, settings):
        # Container stopped, gateway healthy, disk 70%, one 10-minute-old lock
        ctx.docker.status.side_effect = [ContainerState.EXITED, ContainerState.RUNNING]
        ctx.fs = LocalFilesystem()
        ctx.fs.usage_percent = lambda path: 70
        lock = settings.lock_dir / "agent.lock"
        lock.parent.mkdir(parents=True, exist_ok=True)
        lock.write_text("1")
        recent = time.time() - 10 * 60
        os.utime(lock, (recent, recent))

        report = SelfHealRunner(ctx).run()

        assert report.exit_code == 0
        entries = ctx.log.entries()
        assert len(entries) == 1
        assert entries[0].issue == "neo4j_down"
        assert entries[0].result is HealResult.SUCCESS
        assert lock.exists()

    def test_missing_container_failed_gateway_cleaned_disk(self, ctx, settings, capsys):
        ctx.docker.status.return_value = ContainerState.MISSING
        ctx.probe.probe.return_value = NO_RESPONSE
        ctx.supervisor.pid_on_port.return_value = None
        ctx.fs.usage_percent.side_effect = [95, 80]

        report = SelfHealRunner(ctx).run()

        assert report.exit_code == 1
        results = [e.result for e in ctx.log.entries()]
        assert results == [HealResult.ESCALATE, HealResult.FAILED, HealResult.SUCCESS]
        assert [e.issue for e in report.entries] == ["neo4j_missing", "gateway_down", "disk_high"]
        history = settings.heal_history_path.read_text().splitlines()
        assert len(history) == 3
        assert str(settings.heal_log_path) in capsys.readouterr().out

    def test_second_run_is_idempotent(self, ctx):
        ctx.docker.status.side_effect = [
            ContainerState.EXITED, ContainerState.RUNNING,  # first run heals
            ContainerState.RUNNING,  # second run finds it running
        ]
        first = SelfHealRunner(ctx).run()
        assert len(first.entries) == 1

        second = SelfHealRunner(ctx).run()

        assert second.exit_code == 0
        assert second.entries == []
        assert len(ctx.log.entries()) == 1
