"""All shared types and enums. Everything imports from here."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VaultEvent(str, Enum):
    CREDENTIALS_ADDED = "credentials_added"
    CREDENTIALS_UPDATED = "credentials_updated"
    CREDENTIALS_DELETED = "credentials_deleted"
    OPERATION_FAILED = "operation_failed"


class CallerContext(BaseModel):
    """Identity of whoever invokes a vault operation.

    Supplied by the surrounding environment and trusted as-is; the vault
    never re-derives or verifies it.
    """
    model_config = ConfigDict(frozen=True)

    identity: str = Field(min_length=1)


class CredentialRecord(BaseModel):
    """A single stored credential. ``name`` is the caller-scoped lookup key."""
    model_config = ConfigDict(frozen=True)

    name: str
    username: str
    password: str = Field(repr=False)
    note: str = ""

    def as_tuple(self) -> tuple[str, str, str, str]:
        return (self.name, self.username, self.password, self.note)
