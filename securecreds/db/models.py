"""All ORM models. These map 1:1 to the Pydantic types but are SQLAlchemy models.

Tables: credentials, vault_meta
Every credential row carries the owning identity; ``position`` is the
record's index within that identity's sequence and is kept compact.
"""

from sqlalchemy import Column, String, Integer, DateTime, Text, Index
from sqlalchemy.orm import DeclarativeBase
from datetime import datetime, timezone
import uuid


class Base(DeclarativeBase):
    pass


class CredentialModel(Base):
    __tablename__ = "credentials"
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    identity = Column(String, nullable=False)
    position = Column(Integer, nullable=False)          # 0-based, no gaps per identity
    name = Column(String, nullable=False)
    username = Column(String, nullable=False)
    password = Column(Text, nullable=False)             # stored as given, not encrypted
    note = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # Not unique: positions are shifted in bulk on delete.
    __table_args__ = (Index("ix_credential_identity_position", "identity", "position"),)


class VaultMetaModel(Base):
    __tablename__ = "vault_meta"
    key = Column(String, primary_key=True)              # "owner"
    value = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
