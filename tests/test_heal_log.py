# Tests for clawheal/heal_log.py
# Created: 2026-10-12

from __future__ import annotations

import json
import re
from datetime import UTC, datetime

import pytest

from clawheal.heal_log import (
    HealLog,
    HealLogEntry,
    HealLogError,
    HealResult,
    timestamp,
)


@pytest.fixture
def log(tmp_path):
    health = tmp_path / "health"
    return HealLog(health / "heal-log.json", health / "heal-history.log")


def _entry(issue="neo4j_down", result=HealResult.SUCCESS, duration_ms=1500):
    return HealLogEntry.create(
        issue=issue,
        diagnosis="container was exited",
        action="docker start neo4j",
        result=result,
        verify="container now running",
        duration_ms=duration_ms,
    )


class TestTimestamp:
    def test_second_precision_utc(self):
        now = datetime(2026, 10, 12, 8, 30, 5, 123456, tzinfo=UTC)
        assert timestamp(now) == "2026-10-12T08:30:05Z"

    def test_default_is_now(self):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", timestamp())


class TestHealLogEntry:
    def test_history_line_format(self):
        entry = HealLogEntry(
            timestamp="2026-10-12T08:30:05Z",
            issue="gateway_down",
            diagnosis="no process on port 18789",
            action="launchctl kickstart gateway",
            result=HealResult.FAILED,
            verify="HTTP 000 after restart",
            duration_ms=5230,
        )
        assert entry.history_line() == (
            "2026-10-12T08:30:05Z | gateway_down | launchctl kickstart gateway | failed | 5.2s"
        )

    def test_negative_duration_clamped(self):
        assert _entry(duration_ms=-5).duration_ms == 0

    def test_dict_roundtrip_keeps_result_enum(self):
        entry = _entry(result=HealResult.ESCALATE)
        data = entry.to_dict()
        assert data["result"] == "escalate"
        assert HealLogEntry.from_dict(data) == entry

    def test_entries_are_immutable(self):
        entry = _entry()
        with pytest.raises(AttributeError):
            entry.result = HealResult.FAILED


class TestEnsure:
    def test_creates_directory_and_empty_array(self, log):
        log.ensure()
        assert log.log_path.read_text() == "[]"

    def test_reseeds_empty_file(self, log):
        log.log_path.parent.mkdir(parents=True)
        log.log_path.write_text("")
        log.ensure()
        assert json.loads(log.log_path.read_text()) == []

    def test_never_truncates_existing_log(self, log):
        log.append(_entry())
        before = log.log_path.read_text()
        log.ensure()
        assert log.log_path.read_text() == before


class TestAppend:
    def test_appends_to_both_files(self, log):
        log.append(_entry("neo4j_down"))
        log.append(_entry("stale_locks"))

        data = json.loads(log.log_path.read_text())
        assert [d["issue"] for d in data] == ["neo4j_down", "stale_locks"]
        assert set(data[0]) == {
            "timestamp", "issue", "diagnosis", "action", "result", "verify", "duration_ms",
        }

        lines = log.history_path.read_text().splitlines()
        assert len(lines) == 2
        assert lines[0].endswith("| neo4j_down | docker start neo4j | success | 1.5s")

    def test_no_temp_file_left_behind(self, log):
        log.append(_entry())
        leftovers = [p.name for p in log.log_path.parent.iterdir()]
        assert sorted(leftovers) == ["heal-history.log", "heal-log.json"]

    def test_corrupt_log_is_not_overwritten(self, log):
        log.log_path.parent.mkdir(parents=True)
        log.log_path.write_text("{not json")
        with pytest.raises(HealLogError):
            log.append(_entry())
        assert log.log_path.read_text() == "{not json"
        assert not log.history_path.exists()

    def test_non_array_log_rejected(self, log):
        log.log_path.parent.mkdir(parents=True)
        log.log_path.write_text('{"issue": "x"}')
        with pytest.raises(HealLogError):
            log.append(_entry())


class TestEntries:
    def test_missing_log_is_empty(self, log):
        assert log.entries() == []

    def test_reads_back_in_order(self, log):
        log.append(_entry("a"))
        log.append(_entry("b"))
        assert [e.issue for e in log.entries()] == ["a", "b"]

    @pytest.mark.parametrize(
        "raw",
        [
            [{"timestamp": "t", "issue": "x", "result": "weird"}],
            [{"timestamp": "t", "result": "success"}],
            ["not an object"],
        ],
    )
    def test_malformed_entry_raises(self, log, raw):
        log.log_path.parent.mkdir(parents=True)
        log.log_path.write_text(json.dumps(raw))
        with pytest.raises(HealLogError, match="entry 0 is malformed"):
            log.entries()
