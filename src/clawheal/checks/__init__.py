# clawheal — Checkers
# Each checker is detect → diagnose → fix → verify → log for one concern.
# Created: 2026-10-12

from clawheal.checks.base import CheckOutcome, HealContext
from clawheal.checks.container import check_container
from clawheal.checks.disk import check_disk
from clawheal.checks.gateway import check_gateway
from clawheal.checks.locks import check_locks

__all__ = [
    "CheckOutcome",
    "HealContext",
    "check_container",
    "check_disk",
    "check_gateway",
    "check_locks",
]
