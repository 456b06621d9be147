"""Data access layer. Every query is identity-scoped.

This is the ONLY layer that talks to the database.
:class:`SqlVaultStore` implements the ``VaultStore`` protocol; each method
runs in its own transaction and rolls back on any error.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import select, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from securecreds.db.models import CredentialModel, VaultMetaModel
from securecreds.exceptions import StorageError
from securecreds.types import CredentialRecord

logger = logging.getLogger(__name__)

_OWNER_KEY = "owner"


def _describe(exc: SQLAlchemyError) -> str:
    """Error text without the statement or its bound parameters, which carry passwords."""
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return f"{type(exc).__name__}: {orig}"
    return type(exc).__name__


def _model_to_record(m: CredentialModel) -> CredentialRecord:
    return CredentialRecord(name=m.name, username=m.username, password=m.password, note=m.note or "")


class SqlVaultStore:
    """Vault persistence over SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        try:
            with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as exc:
            reason = _describe(exc)
            logger.error("[Store] Transaction rolled back: %s", reason)
            raise StorageError(f"Vault storage operation failed: {reason}") from exc

    def _get_row(self, session: Session, identity: str, index: int) -> CredentialModel:
        row = session.execute(
            select(CredentialModel).where(
                CredentialModel.identity == identity,
                CredentialModel.position == index,
            )
        ).scalar_one_or_none()
        if row is None:
            raise IndexError(f"No record at position {index} for identity '{identity}'")
        return row

    # ── Owner ──
    def get_owner(self) -> Optional[str]:
        with self._transaction() as session:
            meta = session.get(VaultMetaModel, _OWNER_KEY)
            return meta.value if meta else None

    def set_owner(self, identity: str) -> None:
        with self._transaction() as session:
            session.merge(VaultMetaModel(key=_OWNER_KEY, value=identity))

    # ── Records ──
    def list_records(self, identity: str) -> list[CredentialRecord]:
        with self._transaction() as session:
            result = session.execute(
                select(CredentialModel)
                .where(CredentialModel.identity == identity)
                .order_by(CredentialModel.position)
            )
            return [_model_to_record(m) for m in result.scalars().all()]

    def append_record(self, identity: str, record: CredentialRecord) -> int:
        with self._transaction() as session:
            position = session.execute(
                select(func.count()).select_from(CredentialModel).where(CredentialModel.identity == identity)
            ).scalar_one()
            session.add(CredentialModel(
                identity=identity,
                position=position,
                name=record.name,
                username=record.username,
                password=record.password,
                note=record.note,
            ))
            return position

    def replace_record(self, identity: str, index: int, record: CredentialRecord) -> None:
        with self._transaction() as session:
            row = self._get_row(session, identity, index)
            row.name = record.name
            row.username = record.username
            row.password = record.password
            row.note = record.note
            row.updated_at = datetime.now(timezone.utc)

    def remove_record(self, identity: str, index: int) -> None:
        with self._transaction() as session:
            row = self._get_row(session, identity, index)
            session.delete(row)
            session.flush()
            session.execute(
                update(CredentialModel)
                .where(CredentialModel.identity == identity, CredentialModel.position > index)
                .values(position=CredentialModel.position - 1)
            )
