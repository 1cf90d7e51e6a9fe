# clawheal — Filesystem Adapter
# Disk usage, pattern/age file search, removal, and lock-file reads.
# Created: 2026-10-12

from __future__ import annotations

import fnmatch
import logging
import math
import os
import shutil
import time
from collections.abc import Iterable
from datetime import timedelta
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFilesystem:
    """Filesystem queries used by the disk and lock checkers."""

    def usage_percent(self, path: Path) -> int:
        """Used space as a whole percentage, rounded up the way ``df`` does."""
        usage = shutil.disk_usage(path)
        denominator = usage.used + usage.free
        if denominator == 0:
            return 0
        return math.ceil(usage.used * 100 / denominator)

    def find(
        self,
        roots: Iterable[Path],
        pattern: str,
        older_than: timedelta | None = None,
    ) -> list[Path]:
        """Regular files under ``roots`` whose name matches ``pattern``.

        With ``older_than`` set, only files last modified more than that long
        ago are returned. Missing or unreadable directories are skipped.
        """
        cutoff = time.time() - older_than.total_seconds() if older_than else None
        matches: list[Path] = []
        for root in roots:
            if not root.is_dir():
                continue
            for dirpath, _dirnames, filenames in os.walk(root):
                for name in fnmatch.filter(filenames, pattern):
                    path = Path(dirpath) / name
                    try:
                        if not path.is_file():
                            continue
                        if cutoff is not None and path.stat().st_mtime >= cutoff:
                            continue
                    except OSError:
                        continue
                    matches.append(path)
        return matches

    def remove(self, path: Path) -> bool:
        try:
            path.unlink(missing_ok=True)
            return True
        except OSError as exc:
            logger.warning("Could not remove %s: %s", path, exc)
            return False

    def read_first_line(self, path: Path) -> str:
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                return f.readline().strip()
        except OSError:
            return ""
