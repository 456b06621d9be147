"""SqlVaultStore — persistence over SQLAlchemy.

Uses an in-memory SQLite database so no external server is required.
"""

import pytest
import logging

from sqlalchemy import create_engine, select, text

from securecreds.credentials.store import VaultStore
from securecreds.credentials.vault import CredentialVault
from securecreds.db.database import build_engine, build_session_factory, init_db
from securecreds.db.models import CredentialModel
from securecreds.db.repository import SqlVaultStore
from securecreds.exceptions import StorageError
from securecreds.types import CallerContext, CredentialRecord


def _rec(name: str) -> CredentialRecord:
    return CredentialRecord(name=name, username=f"user-{name}", password=f"pw-{name}", note="")


def _reject_inserts(session_factory) -> None:
    """Install a trigger that aborts every credentials insert."""
    with session_factory() as s, s.begin():
        s.execute(text(
            "CREATE TRIGGER reject_insert BEFORE INSERT ON credentials "
            "BEGIN SELECT RAISE(ABORT, 'insert rejected'); END"
        ))


def _positions(session_factory, identity: str) -> list[tuple[int, str]]:
    with session_factory() as s:
        rows = s.execute(
            select(CredentialModel.position, CredentialModel.name)
            .where(CredentialModel.identity == identity)
            .order_by(CredentialModel.position)
        ).all()
    return [tuple(r) for r in rows]


def test_satisfies_protocol(sql_store):
    assert isinstance(sql_store, VaultStore)


def test_owner_roundtrip(sql_store):
    assert sql_store.get_owner() is None
    sql_store.set_owner("0xowner")
    assert sql_store.get_owner() == "0xowner"


def test_append_returns_positions(sql_store):
    assert sql_store.append_record("a", _rec("one")) == 0
    assert sql_store.append_record("a", _rec("two")) == 1
    assert sql_store.append_record("b", _rec("three")) == 0


def test_list_unknown_identity_is_empty(sql_store):
    assert sql_store.list_records("nobody") == []


def test_remove_compacts_positions(sql_store, session_factory):
    for name in ("n0", "n1", "n2", "n3"):
        sql_store.append_record("a", _rec(name))
    sql_store.append_record("b", _rec("other"))

    sql_store.remove_record("a", 1)

    assert _positions(session_factory, "a") == [(0, "n0"), (1, "n2"), (2, "n3")]
    assert _positions(session_factory, "b") == [(0, "other")]


def test_replace_keeps_position(sql_store, session_factory):
    for name in ("n0", "n1", "n2"):
        sql_store.append_record("a", _rec(name))
    sql_store.replace_record("a", 1, _rec("changed"))
    assert _positions(session_factory, "a") == [(0, "n0"), (1, "changed"), (2, "n2")]
    assert sql_store.list_records("a")[1].password == "pw-changed"


def test_out_of_range_index_raises(sql_store):
    sql_store.append_record("a", _rec("n0"))
    with pytest.raises(IndexError):
        sql_store.replace_record("a", 5, _rec("x"))
    with pytest.raises(IndexError):
        sql_store.remove_record("a", 1)
    assert [r.name for r in sql_store.list_records("a")] == ["n0"]


def test_missing_schema_raises_storage_error():
    engine = build_engine("sqlite:///:memory:")
    store = SqlVaultStore(build_session_factory(engine))
    with pytest.raises(StorageError, match="Vault storage operation failed"):
        store.list_records("a")
    engine.dispose()


def test_state_survives_reopen(tmp_path):
    url = f"sqlite:///{tmp_path / 'nested' / 'vault.db'}"
    alice = CallerContext(identity="0xalice")

    engine = build_engine(url)
    init_db(engine)
    vault = CredentialVault(SqlVaultStore(build_session_factory(engine)), owner=CallerContext(identity="0xowner"))
    vault.add_credentials(alice, "name1", "username1", "password1", "note1")
    vault.add_credentials(alice, "name2", "username2", "password2", "note2")
    vault.delete_credentials(alice, "name1")
    engine.dispose()

    engine = build_engine(url)
    reopened = CredentialVault(SqlVaultStore(build_session_factory(engine)), owner=alice)
    assert reopened.owner == "0xowner"
    assert [r.as_tuple() for r in reopened.get_credentials(alice)] == [
        ("name2", "username2", "password2", "note2"),
    ]
    engine.dispose()


def test_position_index_is_not_unique():
    # Positions are shifted in a single UPDATE on delete; a unique index could
    # collide part-way through.
    index = next(i for i in CredentialModel.__table__.indexes if i.name == "ix_credential_identity_position")
    assert not index.unique
    assert [c.name for c in index.columns] == ["identity", "position"]


# ── Failed writes never expose secrets ──────────────────────────────────────

def test_failed_insert_hides_secrets(sql_store, session_factory, caplog):
    _reject_inserts(session_factory)
    vault = CredentialVault(sql_store, owner=CallerContext(identity="0xowner"))
    alice = CallerContext(identity="0xalice")

    with caplog.at_level(logging.DEBUG, logger="securecreds"):
        with pytest.raises(StorageError, match="insert rejected") as exc_info:
            vault.add_credentials(alice, "n", "secret-login", "TOPSECRETPW", "x")

    assert "TOPSECRETPW" not in str(exc_info.value)
    assert "secret-login" not in str(exc_info.value)
    assert "TOPSECRETPW" not in caplog.text
    assert "secret-login" not in caplog.text
    assert vault.get_credentials(alice) == []


def test_failed_insert_hides_secrets_with_plain_engine(caplog):
    engine = create_engine("sqlite:///:memory:")
    init_db(engine)
    factory = build_session_factory(engine)
    _reject_inserts(factory)
    store = SqlVaultStore(factory)

    with caplog.at_level(logging.DEBUG, logger="securecreds"):
        with pytest.raises(StorageError) as exc_info:
            store.append_record("a", CredentialRecord(name="n", username="u", password="TOPSECRETPW"))

    assert "TOPSECRETPW" not in str(exc_info.value)
    assert "TOPSECRETPW" not in caplog.text
    assert "IntegrityError" in str(exc_info.value)
    engine.dispose()
