"""
Heal Log.
Created: 2026-10-12

Append-only record of every remediation attempt. Two files live side by side
in the health directory:

- ``heal-log.json``: JSON array of entries, rewritten atomically on each append
- ``heal-history.log``: one pipe-separated line per entry for quick scanning

Neither file is rotated or pruned here.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def timestamp(now: datetime | None = None) -> str:
    """UTC timestamp with second precision, e.g. ``2026-10-12T08:30:00Z``."""
    return (now or datetime.now(tz=UTC)).strftime(TIMESTAMP_FORMAT)


class HealResult(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"
    SKIPPED = "skipped"
    ESCALATE = "escalate"  # Deliberately not auto-remediated


class HealLogError(Exception):
    """The structured log exists but cannot be read as a JSON array."""


@dataclass(frozen=True)
class HealLogEntry:
    """A single remediation attempt."""

    timestamp: str
    issue: str  # Taxonomy tag, e.g. "neo4j_down"
    diagnosis: str
    action: str
    result: HealResult
    verify: str = ""
    duration_ms: int = 0

    @classmethod
    def create(
        cls,
        issue: str,
        diagnosis: str,
        action: str,
        result: HealResult,
        verify: str = "",
        duration_ms: int = 0,
    ) -> HealLogEntry:
        return cls(
            timestamp=timestamp(),
            issue=issue,
            diagnosis=diagnosis,
            action=action,
            result=result,
            verify=verify,
            duration_ms=max(0, int(duration_ms)),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HealLogEntry:
        return cls(
            timestamp=data["timestamp"],
            issue=data["issue"],
            diagnosis=data.get("diagnosis", ""),
            action=data.get("action", ""),
            result=HealResult(data["result"]),
            verify=data.get("verify", ""),
            duration_ms=int(data.get("duration_ms", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["result"] = self.result.value
        return data

    def history_line(self) -> str:
        """``timestamp | issue | action | result | 1.2s``"""
        seconds = self.duration_ms / 1000
        return (
            f"{self.timestamp} | {self.issue} | {self.action} | "
            f"{self.result.value} | {seconds:.1f}s"
        )


class HealLog:
    """Structured heal log plus its one-line history companion."""

    def __init__(self, log_path: Path, history_path: Path) -> None:
        self.log_path = log_path
        self.history_path = history_path

    def ensure(self) -> None:
        """Create the directory, and seed ``[]`` if the log is missing or empty."""
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.log_path.exists() or self.log_path.stat().st_size == 0:
            self.log_path.write_text("[]", encoding="utf-8")
            logger.debug("Initialized heal log at %s", self.log_path)

    def append(self, entry: HealLogEntry) -> None:
        """Append one entry to both files.

        The JSON array is rewritten through a ``.tmp`` sibling and replaced in a
        single rename, so an interrupted run never leaves a truncated log.
        """
        self.ensure()
        data = self._load_raw()
        data.append(entry.to_dict())

        temp_path = self.log_path.with_suffix(".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            temp_path.replace(self.log_path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

        with open(self.history_path, "a", encoding="utf-8") as f:
            f.write(entry.history_line() + "\n")

        logger.info(
            "heal %s: %s (%s) in %dms",
            entry.issue,
            entry.result.value,
            entry.action,
            entry.duration_ms,
        )

    def entries(self) -> list[HealLogEntry]:
        """All entries, oldest first."""
        if not self.log_path.exists() or self.log_path.stat().st_size == 0:
            return []
        entries = []
        for i, data in enumerate(self._load_raw()):
            try:
                entries.append(HealLogEntry.from_dict(data))
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise HealLogError(f"{self.log_path} entry {i} is malformed: {e!r}") from e
        return entries

    def _load_raw(self) -> list[dict[str, Any]]:
        try:
            with open(self.log_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise HealLogError(f"{self.log_path} is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise HealLogError(f"{self.log_path} does not contain a JSON array")
        return data
