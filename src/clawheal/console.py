# clawheal — Console Output
# Mirrors every decision point to stdout with a bracketed prefix,
# e.g. "  [HEAL] Neo4j container status: exited. Attempting restart..."
# Created: 2026-10-12

from __future__ import annotations

BANNER_RULE = "=" * 44


def check(msg: str) -> None:
    print(f"[CHECK] {msg}")


def ok(msg: str) -> None:
    print(f"  [OK] {msg}")


def warn(msg: str) -> None:
    print(f"  [WARN] {msg}")


def heal(msg: str) -> None:
    print(f"  [HEAL] {msg}")


def wait(msg: str) -> None:
    print(f"  [WAIT] {msg}")


def fail(msg: str) -> None:
    print(f"  [FAIL] {msg}")


def skip(msg: str) -> None:
    print(f"  [SKIP] {msg}")


def info(msg: str) -> None:
    print(f"  [INFO] {msg}")


def banner(*lines: str) -> None:
    print(BANNER_RULE)
    for line in lines:
        print(f"  {line}")
    print(BANNER_RULE)
