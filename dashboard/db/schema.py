# dashboard/db/schema.py

import uuid

from sqlalchemy import (
    MetaData, Table, Column, Integer, String,
    Date, ForeignKey, CheckConstraint, Text
)

metadata = MetaData()


def new_id() -> str:
    return str(uuid.uuid4())


users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True, default=new_id),
    Column("name", String(255), nullable=False),
    Column("email", Text, nullable=False, unique=True),
    Column("password", Text, nullable=False),
)

customers = Table(
    "customers",
    metadata,
    Column("id", String(36), primary_key=True, default=new_id),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("image_url", String(255), nullable=False),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", String(36), primary_key=True, default=new_id),
    Column("customer_id", String(36), ForeignKey("customers.id"), nullable=False),
    Column("amount", Integer, nullable=False),
    Column("status", String(255), nullable=False),
    Column("date", Date, nullable=False),
    CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
    CheckConstraint("status IN ('pending', 'paid')", name="ck_invoices_status_enum"),
)

revenue = Table(
    "revenue",
    metadata,
    Column("month", String(4), primary_key=True),
    Column("revenue", Integer, nullable=False),
)
