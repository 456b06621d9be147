"""Application configuration. All env vars defined here with defaults."""

import logging

from pydantic_settings import BaseSettings


class SecureCredsConfig(BaseSettings):
    # ── App ──
    app_name: str = "securecreds"
    debug: bool = False
    log_level: str = "INFO"

    # ── Storage ──
    store_backend: str = "memory"                  # "memory" | "sql"
    database_url: str = "sqlite:///./data/securecreds.db"

    # ── Audit ──
    audit_log_enabled: bool = True              # JSON lifecycle events on securecreds.audit

    model_config = {"env_prefix": "SECURECREDS_", "env_file": ".env", "extra": "ignore"}


def configure_logging(cfg: SecureCredsConfig = None) -> None:
    """Install the root handler at the configured level."""
    cfg = cfg or config
    logging.basicConfig(
        level=cfg.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


config = SecureCredsConfig()
