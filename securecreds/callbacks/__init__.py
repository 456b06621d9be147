"""Callback/hook system for vault lifecycle events."""

from securecreds.callbacks.base import BaseCallback, VaultCallback
from securecreds.callbacks.logging import LoggingCallback

__all__ = ["BaseCallback", "VaultCallback", "LoggingCallback"]
