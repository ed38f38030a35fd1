"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.types import JSON

# Metadata object for all tables
metadata = MetaData()

# Primary key of the single registry_state row
STATE_ROW_ID = 1

# ============================================================================
# SOURCES TABLE (record store: id -> record)
# ============================================================================
sources_table = Table(
    "sources",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("url", Text, nullable=False),
    Column("publisher", Text, nullable=False),
    Column("registered_at", DateTime(timezone=True), nullable=False),
)


# ============================================================================
# URL INDEX TABLE (fingerprint -> id)
# ============================================================================
url_index_table = Table(
    "url_index",
    metadata,
    Column("fingerprint", String(128), primary_key=True),
    Column(
        "source_id",
        Integer,
        ForeignKey("sources.id"),
        nullable=False,
        unique=True,
    ),
)


# ============================================================================
# REGISTRY STATE TABLE (single row: id counter + writer identity)
# ============================================================================
registry_state_table = Table(
    "registry_state",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("next_source_id", Integer, nullable=False),
    Column("writer", String(255), nullable=True),
)


# ============================================================================
# EVENTS TABLE (Outbox)
# ============================================================================
events_table = Table(
    "events",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", String(36), nullable=False, unique=True),
    Column("event_type", String(128), nullable=False),
    Column("payload", JSON, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("delivery_status", String(32), nullable=False),  # pending, delivered, failed
    Column("delivered_at", DateTime(timezone=True), nullable=True),
    Column("delivery_error", Text, nullable=True),
)

Index("idx_events_type_seq", events_table.c.event_type, events_table.c.seq)
Index("idx_events_delivery_status", events_table.c.delivery_status)
