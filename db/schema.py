"""
db/schema.py -- SQLAlchemy Core table definitions.

Both tables live on one MetaData so the vehicles.user_id foreign key resolves
at create_all() time. Column names match the original MySQL schema, which is
also what the HTTP layer exposes for vehicle rows.

Money columns are NUMERIC(15, 2). SQLAlchemy returns them as Decimal; on
SQLite it converts from the stored float with a fixed scale of 2, which is
exact for every value the API accepts.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, MetaData, Numeric, String, Table, Text

metadata = MetaData()

USER_ROLES = ("admin", "seller", "standard")
USER_STATUSES = ("active", "inactive")

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("password", String(255), nullable=False),  # bcrypt hash, never plaintext
    Column("role", String(20), nullable=False, server_default="standard"),
    Column("status", String(20), nullable=False, server_default="active"),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
    Index("idx_users_status", "status"),
)

vehicles = Table(
    "vehicles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("marca", String(100), nullable=False),
    Column("modelo", String(100), nullable=False),
    Column("ano", String(10), nullable=False, server_default=""),
    Column("fipe", Numeric(15, 2), nullable=False, server_default="0"),
    Column("valor_compra", Numeric(15, 2), nullable=False),
    Column("impostos", Numeric(15, 2), nullable=False, server_default="0"),
    Column("valor_venda", Numeric(15, 2), nullable=False),
    Column("observacoes", Text),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
    Index("idx_vehicles_user_id", "user_id"),
    Index("idx_vehicles_created_at", "created_at"),
)
