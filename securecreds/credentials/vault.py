"""CredentialVault — caller-partitioned storage of named credential records.

Every operation is scoped to the :class:`CallerContext` passed in. A caller
can only ever read or change its own ordered sequence of records; the owner
recorded at creation is metadata and grants no access to other callers'
records.

Stored fields are not encrypted.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from securecreds.credentials.store import InMemoryVaultStore, VaultStore
from securecreds.exceptions import CredentialError, CredentialNotFound, CredentialValidationError
from securecreds.types import CallerContext, CredentialRecord, VaultEvent

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "credentials with specified name was not found"


class CredentialVault:
    """Ordered, per-identity credential records backed by a :class:`VaultStore`.

    Args:
        store: Persistence backend. Defaults to a fresh :class:`InMemoryVaultStore`.
        owner: Identity creating the vault. Recorded once; if *store* already
            holds an owner (a re-opened persistent vault) that value is kept.
        callbacks: Plain callables ``cb(event: str, data: dict)`` invoked after
            every successful mutation and every rejected operation.
    """

    def __init__(
        self,
        store: Optional[VaultStore] = None,
        *,
        owner: CallerContext,
        callbacks: list = None,
    ) -> None:
        self._store = store if store is not None else InMemoryVaultStore()
        self.callbacks = callbacks or []

        recorded = self._store.get_owner()
        if recorded is None:
            self._store.set_owner(owner.identity)
            recorded = owner.identity
            logger.debug("[Vault] Created vault owned by %s", recorded)
        elif recorded != owner.identity:
            logger.info("[Vault] Store already owned by %s; ignoring owner %s", recorded, owner.identity)
        self._owner = recorded

    @property
    def owner(self) -> str:
        """Identity recorded at creation. Not consulted by any operation."""
        return self._owner

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def add_credentials(
        self,
        caller: CallerContext,
        name: str,
        username: str,
        password: str,
        note: str = "",
    ) -> None:
        """Append a new record to the end of the caller's sequence.

        Raises:
            CredentialValidationError: *name*, *username* or *password* is
                empty (checked in that order), or a field is not text.
        """
        self._validate(caller, "add", (
            ("name", name, "name is required"),
            ("username", username, "username is required"),
            ("password", password, "password is required"),
        ))

        record = self._make_record(caller, "add", name=name, username=username, password=password, note=note or "")
        index = self._store.append_record(caller.identity, record)
        logger.debug("[Vault] Added credentials '%s' at %d for %s", name, index, caller.identity)
        self._fire_callbacks(VaultEvent.CREDENTIALS_ADDED, {
            "identity": caller.identity,
            "name": name,
            "index": index,
        })

    def update_credentials(
        self,
        caller: CallerContext,
        current_name: str,
        new_name: str,
        new_username: str,
        new_password: str,
        new_note: str = "",
    ) -> None:
        """Replace every field of the first record named *current_name*.

        The record keeps its position in the sequence.

        Raises:
            CredentialValidationError: a required input is empty (checked in
                the order current_name, new_name, new_username, new_password),
                or a new field is not text.
            CredentialNotFound: the caller has no record named *current_name*.
        """
        self._validate(caller, "update", (
            ("current_name", current_name, "current credentials name is required"),
            ("new_name", new_name, "credentials new name is required"),
            ("new_username", new_username, "credentials new username is required"),
            ("new_password", new_password, "credentials new password is required"),
        ))

        record = self._make_record(
            caller, "update", name=new_name, username=new_username, password=new_password, note=new_note or ""
        )
        index = self._find_index(caller, current_name)
        if index is None:
            raise self._reject(caller, "update", CredentialNotFound(NOT_FOUND_MESSAGE, credential_name=current_name))

        self._store.replace_record(caller.identity, index, record)
        logger.debug("[Vault] Updated credentials '%s' -> '%s' at %d for %s", current_name, new_name, index, caller.identity)
        self._fire_callbacks(VaultEvent.CREDENTIALS_UPDATED, {
            "identity": caller.identity,
            "name": new_name,
            "previous_name": current_name,
            "index": index,
        })

    def delete_credentials(self, caller: CallerContext, name: str) -> None:
        """Remove the first record named *name*; later records shift down by one.

        Raises:
            CredentialValidationError: *name* is empty.
            CredentialNotFound: the caller has no record named *name*.
        """
        self._validate(caller, "delete", (("name", name, "name is required"),))

        index = self._find_index(caller, name)
        if index is None:
            raise self._reject(caller, "delete", CredentialNotFound(NOT_FOUND_MESSAGE, credential_name=name))

        self._store.remove_record(caller.identity, index)
        logger.debug("[Vault] Deleted credentials '%s' at %d for %s", name, index, caller.identity)
        self._fire_callbacks(VaultEvent.CREDENTIALS_DELETED, {
            "identity": caller.identity,
            "name": name,
            "index": index,
        })

    def get_credentials(self, caller: CallerContext) -> list[CredentialRecord]:
        """Return the caller's records in insertion order. Never raises for an unknown caller."""
        return self._store.list_records(caller.identity)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find_index(self, caller: CallerContext, name: str) -> Optional[int]:
        for index, record in enumerate(self._store.list_records(caller.identity)):
            if record.name == name:
                return index
        return None

    def _validate(self, caller: CallerContext, operation: str, fields: tuple) -> None:
        for field, value, message in fields:
            if not value:
                raise self._reject(
                    caller,
                    operation,
                    CredentialValidationError(message, field=field, operation=operation),
                )

    def _make_record(self, caller: CallerContext, operation: str, **fields: Any) -> CredentialRecord:
        try:
            return CredentialRecord(**fields)
        except ValidationError as exc:
            field = str(exc.errors()[0]["loc"][0])
            if operation == "update":
                field = f"new_{field}"
            raise self._reject(
                caller,
                operation,
                CredentialValidationError(f"{field} must be text", field=field, operation=operation),
            ) from exc

    def _reject(self, caller: CallerContext, operation: str, error: CredentialError) -> CredentialError:
        """Log and announce a rejected operation; returns *error* for the caller to raise."""
        logger.info("[Vault] Rejected %s for %s: %s", operation, caller.identity, error)
        self._fire_callbacks(VaultEvent.OPERATION_FAILED, {
            "identity": caller.identity,
            "operation": operation,
            "error_type": type(error).__name__,
            "error": str(error),
        })
        return error

    def _fire_callbacks(self, event: VaultEvent, data: dict[str, Any]) -> None:
        """Invoke all registered callbacks for a lifecycle event."""
        for cb in self.callbacks:
            try:
                cb(event.value, data)
            except Exception as cb_exc:
                logger.warning(f"[Vault] Callback error on '{event.value}': {cb_exc}")
