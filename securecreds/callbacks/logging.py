"""Structured JSON logging callback for vault lifecycle events."""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from securecreds.callbacks.base import BaseCallback

logger = logging.getLogger("securecreds.audit")


def _now() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


class LoggingCallback(BaseCallback):
    """Emits one JSON log line per vault lifecycle event.

    Each log line is a self-contained JSON object with:
      - event: event type name
      - ts: ISO-8601 UTC timestamp
      - identity, plus the record name/index or the failure reason

    Log level: INFO for mutations, WARNING for rejected operations.
    Logger name: securecreds.audit (configure in your logging setup)
    """

    def on_credentials_added(self, identity: str, name: str, index: int, **kwargs: Any) -> None:
        logger.info(json.dumps({
            "event": "credentials_added",
            "ts": _now(),
            "identity": identity,
            "name": name,
            "index": index,
        }))

    def on_credentials_updated(
        self, identity: str, name: str, previous_name: str, index: int, **kwargs: Any
    ) -> None:
        logger.info(json.dumps({
            "event": "credentials_updated",
            "ts": _now(),
            "identity": identity,
            "name": name,
            "previous_name": previous_name,
            "index": index,
        }))

    def on_credentials_deleted(self, identity: str, name: str, index: int, **kwargs: Any) -> None:
        logger.info(json.dumps({
            "event": "credentials_deleted",
            "ts": _now(),
            "identity": identity,
            "name": name,
            "index": index,
        }))

    def on_operation_failed(
        self, identity: str, operation: str, error_type: str, error: str, **kwargs: Any
    ) -> None:
        logger.warning(json.dumps({
            "event": "operation_failed",
            "ts": _now(),
            "identity": identity,
            "operation": operation,
            "error_type": error_type,
            "error": error[:200],
        }))
