"""Credential Vault — caller-partitioned credential records."""

from securecreds.credentials.store import InMemoryVaultStore, VaultStore
from securecreds.credentials.vault import CredentialVault

__all__ = ["CredentialVault", "InMemoryVaultStore", "VaultStore"]
