"""Base callback protocol for vault lifecycle hooks.

The vault invokes every registered callback as ``cb(event, data)`` after each
successful mutation and each rejected operation. ``data`` never carries
usernames or passwords.

Usage:
    class MyCallback(BaseCallback):
        def on_credentials_deleted(self, identity, name, index, **kw):
            print(f"{identity} removed {name}")

    vault = CredentialVault(owner=ctx, callbacks=[MyCallback()])
"""

from typing import Any, Protocol, runtime_checkable

from securecreds.types import VaultEvent


@runtime_checkable
class VaultCallback(Protocol):
    """Anything callable as ``cb(event: str, data: dict)``."""

    def __call__(self, event: str, data: dict[str, Any]) -> None:
        ...


class BaseCallback:
    """Dispatches events to named no-op hooks.

    Subclass this and override only the hooks you need.
    """

    def __call__(self, event: str, data: dict[str, Any]) -> None:
        if event == VaultEvent.CREDENTIALS_ADDED:
            self.on_credentials_added(**data)
        elif event == VaultEvent.CREDENTIALS_UPDATED:
            self.on_credentials_updated(**data)
        elif event == VaultEvent.CREDENTIALS_DELETED:
            self.on_credentials_deleted(**data)
        elif event == VaultEvent.OPERATION_FAILED:
            self.on_operation_failed(**data)

    def on_credentials_added(self, identity: str, name: str, index: int, **kwargs: Any) -> None:
        pass

    def on_credentials_updated(
        self, identity: str, name: str, previous_name: str, index: int, **kwargs: Any
    ) -> None:
        pass

    def on_credentials_deleted(self, identity: str, name: str, index: int, **kwargs: Any) -> None:
        pass

    def on_operation_failed(
        self, identity: str, operation: str, error_type: str, error: str, **kwargs: Any
    ) -> None:
        pass
