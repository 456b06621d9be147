"""Build a ready-to-use CredentialVault from configuration."""

import logging

from securecreds.callbacks.logging import LoggingCallback
from securecreds.config import SecureCredsConfig
from securecreds.credentials.store import InMemoryVaultStore, VaultStore
from securecreds.credentials.vault import CredentialVault
from securecreds.db.database import build_engine, build_session_factory, init_db
from securecreds.db.repository import SqlVaultStore
from securecreds.exceptions import SecureCredsError
from securecreds.types import CallerContext

logger = logging.getLogger(__name__)


def create_store(cfg: SecureCredsConfig) -> VaultStore:
    """Return the store for ``cfg.store_backend``; the SQL schema is created if missing."""
    backend = cfg.store_backend.lower()
    if backend == "memory":
        return InMemoryVaultStore()
    if backend == "sql":
        engine = build_engine(cfg.database_url, echo=cfg.debug)
        init_db(engine)
        logger.info("[Factory] Using SQL vault store at %s", engine.url.render_as_string(hide_password=True))
        return SqlVaultStore(build_session_factory(engine))
    raise SecureCredsError(
        f"Unknown store backend '{cfg.store_backend}'",
        details={"supported": ["memory", "sql"]},
    )


def create_vault(owner: CallerContext, cfg: SecureCredsConfig = None) -> CredentialVault:
    """Build a vault on the configured store, with the JSON audit logger when enabled."""
    cfg = cfg or SecureCredsConfig()
    callbacks = [LoggingCallback()] if cfg.audit_log_enabled else []
    return CredentialVault(create_store(cfg), owner=owner, callbacks=callbacks)
