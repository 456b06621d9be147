"""Persistence substrate for the credential vault.

The vault only ever talks to a :class:`VaultStore`. Each method is a single
all-or-nothing commit: a call that raises leaves no partially-applied state
visible to later reads.
"""

from typing import Optional, Protocol, runtime_checkable

from securecreds.types import CredentialRecord


@runtime_checkable
class VaultStore(Protocol):
    """Identity → ordered record sequence, plus the owner metadata."""

    def get_owner(self) -> Optional[str]:
        """Return the stored owner identity, or ``None`` before first creation."""
        ...

    def set_owner(self, identity: str) -> None:
        ...

    def list_records(self, identity: str) -> list[CredentialRecord]:
        """Return *identity*'s records in insertion order (empty list if none)."""
        ...

    def append_record(self, identity: str, record: CredentialRecord) -> int:
        """Append *record* to the end of *identity*'s sequence. Returns its index."""
        ...

    def replace_record(self, identity: str, index: int, record: CredentialRecord) -> None:
        """Overwrite the record at *index* without moving it."""
        ...

    def remove_record(self, identity: str, index: int) -> None:
        """Remove the record at *index*; later records shift down by one."""
        ...


class InMemoryVaultStore:
    """Process-local store. State lives for the lifetime of the instance."""

    def __init__(self) -> None:
        self._owner: Optional[str] = None
        self._records: dict[str, list[CredentialRecord]] = {}

    def get_owner(self) -> Optional[str]:
        return self._owner

    def set_owner(self, identity: str) -> None:
        self._owner = identity

    def list_records(self, identity: str) -> list[CredentialRecord]:
        return list(self._records.get(identity, []))

    def append_record(self, identity: str, record: CredentialRecord) -> int:
        records = self._records.setdefault(identity, [])
        records.append(record)
        return len(records) - 1

    def replace_record(self, identity: str, index: int, record: CredentialRecord) -> None:
        records = self._records.get(identity, [])
        if not 0 <= index < len(records):
            raise IndexError(f"No record at position {index} for identity '{identity}'")
        records[index] = record

    def remove_record(self, identity: str, index: int) -> None:
        records = self._records.get(identity, [])
        if not 0 <= index < len(records):
            raise IndexError(f"No record at position {index} for identity '{identity}'")
        del records[index]
