"""SECURECREDS — caller-partitioned credential vault.

Usage:
    from securecreds import CallerContext, CredentialVault

    vault = CredentialVault(owner=CallerContext(identity="deployer"))
    alice = CallerContext(identity="alice")
    vault.add_credentials(alice, "github", "alice", "s3cret", "work account")
    vault.get_credentials(alice)
"""

from securecreds.types import CallerContext, CredentialRecord, VaultEvent
from securecreds.exceptions import (
    SecureCredsError, CredentialError, CredentialValidationError,
    CredentialNotFound, StorageError,
)
from securecreds.credentials import CredentialVault, InMemoryVaultStore, VaultStore
from securecreds.factory import create_vault
from securecreds.version import __version__

__all__ = [
    "CallerContext", "CredentialRecord", "VaultEvent",
    "SecureCredsError", "CredentialError", "CredentialValidationError",
    "CredentialNotFound", "StorageError",
    "CredentialVault", "InMemoryVaultStore", "VaultStore",
    "create_vault",
    "__version__",
]
