# clawheal — Settings
# Paths, thresholds and timings for the self-heal runner.
# Values come from CLAWHEAL_* environment variables or a .env file.
# Created: 2026-10-12

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Self-heal configuration. Fixed for the lifetime of one run."""

    model_config = SettingsConfigDict(
        env_prefix="CLAWHEAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Installation root (the client's home directory)
    home: Path = Field(default_factory=Path.home)

    # Gateway
    gateway_url: str = "http://localhost:18789/health"
    gateway_port: int = 18789
    gateway_timeout: float = 5.0
    gateway_label: str = "com.openclaw.gateway"
    gateway_settle_seconds: float = 5.0
    gateway_kill_wait_seconds: float = 2.0

    # Graph database container
    container_name: str = "neo4j"
    container_settle_seconds: float = 10.0

    # Disk
    disk_path: Path = Path("/")
    disk_threshold: int = 90
    disk_recovery_target: int = 85
    log_archive_roots: list[Path] | None = None
    session_max_age_days: int = 30

    # Locks
    lock_max_age_minutes: int = 60

    # External commands
    command_timeout: float = 30.0
    prune_timeout: float = 300.0

    @property
    def openclaw_dir(self) -> Path:
        return self.home / ".openclaw"

    @property
    def health_dir(self) -> Path:
        return self.openclaw_dir / "workspace" / "health"

    @property
    def heal_log_path(self) -> Path:
        return self.health_dir / "heal-log.json"

    @property
    def heal_history_path(self) -> Path:
        return self.health_dir / "heal-history.log"

    @property
    def lock_dir(self) -> Path:
        return self.openclaw_dir

    @property
    def sessions_dir(self) -> Path:
        return self.openclaw_dir / "agents"

    @property
    def archive_roots(self) -> list[Path]:
        """Directories searched for rotated ``*.log.gz`` files."""
        if self.log_archive_roots is not None:
            return list(self.log_archive_roots)
        return [Path("/var/log"), self.openclaw_dir]


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
