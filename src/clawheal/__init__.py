# clawheal — OpenClaw self-heal runner
# Checks the Neo4j container, gateway, disk space and lock files on a client
# machine, repairs what it safely can, and records every attempt.
# Created: 2026-10-12

try:
    from importlib.metadata import version as _meta_version

    __version__ = _meta_version("clawheal")
except Exception:
    __version__ = "0.1.0"
