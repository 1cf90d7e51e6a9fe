# clawheal — Entry Point
# Usage:
#   clawheal [run]                 run every check, heal what can be healed
#   clawheal history [-n N]        show recent heal-log entries
#   clawheal checks                list checkers in run order
# Exit 0 = all healthy or healed. Exit 1 = something could not be fixed.
# Created: 2026-10-12

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from clawheal.config import Settings, get_settings

logger = logging.getLogger("clawheal")


def _build_parser() -> argparse.ArgumentParser:
    # Shared options are accepted before or after the subcommand. SUPPRESS keeps
    # a subparser from resetting a value given at the top level.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--home",
        type=Path,
        default=argparse.SUPPRESS,
        help="Installation home directory (default: current user's home)",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Also print debug logging to stderr",
    )

    parser = argparse.ArgumentParser(
        prog="clawheal",
        description="Detect and repair common OpenClaw infrastructure problems",
        parents=[common],
    )

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("run", parents=[common], help="Run all checks and heal (default)")

    history = sub.add_parser("history", parents=[common], help="Show recent heal-log entries")
    history.add_argument("-n", type=int, default=20, help="Number of entries (default: 20)")
    history.add_argument("--issue", default=None, help="Only show this issue tag")

    sub.add_parser("checks", parents=[common], help="List checkers in run order")
    return parser


def _setup_logging(settings: Settings, verbose: bool) -> None:
    settings.health_dir.mkdir(parents=True, exist_ok=True)
    handlers: list[logging.Handler] = [
        logging.FileHandler(settings.health_dir / "self-heal.log", encoding="utf-8"),
    ]
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def _cmd_run(settings: Settings) -> int:
    from clawheal.checks import HealContext
    from clawheal.runner import SelfHealRunner

    report = SelfHealRunner(HealContext.from_settings(settings)).run()
    return report.exit_code


def _cmd_history(settings: Settings, limit: int, issue: str | None) -> int:
    from clawheal.heal_log import HealLog, HealLogError

    log = HealLog(settings.heal_log_path, settings.heal_history_path)
    try:
        entries = log.entries()
    except HealLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if issue:
        entries = [e for e in entries if e.issue == issue]
    if not entries:
        print("No heal entries recorded.")
        return 0

    for entry in entries[-limit:] if limit > 0 else entries:
        print(entry.history_line())
    return 0


def _cmd_checks() -> int:
    from clawheal.runner import ALL_CHECKS

    for i, (label, _fn) in enumerate(ALL_CHECKS, start=1):
        print(f"  {i}. {label}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = _build_parser().parse_args(argv)

    home = getattr(args, "home", None)
    settings = Settings(home=home) if home else get_settings()
    _setup_logging(settings, getattr(args, "verbose", False))

    if args.command == "history":
        return _cmd_history(settings, args.n, args.issue)
    if args.command == "checks":
        return _cmd_checks()

    logger.info("Self-heal starting (home=%s)", settings.home)
    return _cmd_run(settings)


if __name__ == "__main__":
    sys.exit(main())
