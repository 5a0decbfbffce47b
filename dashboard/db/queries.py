# dashboard/db/queries.py
"""
Read queries behind the dashboard pages.

Every function takes an open SQLAlchemy connection; callers decide how
long it lives.
"""

import math
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.engine import Connection

from dashboard.db.schema import customers, invoices, revenue
from dashboard.models.customers import CustomerField, CustomerOut, CustomersTableRow
from dashboard.models.invoices import (
    CardData,
    InvoiceEditValues,
    InvoicesTableRow,
    LatestInvoice,
    Revenue,
)

LATEST_INVOICES_LIMIT = 5


def fetch_revenue(conn: Connection) -> List[Revenue]:
    rows = conn.execute(select(revenue.c.month, revenue.c.revenue)).mappings().all()
    return [Revenue(month=row["month"], revenue=row["revenue"]) for row in rows]


def fetch_latest_invoices(conn: Connection) -> List[LatestInvoice]:
    stmt = (
        select(
            invoices.c.id,
            invoices.c.amount,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .select_from(invoices.join(customers))
        .order_by(invoices.c.date.desc())
        .limit(LATEST_INVOICES_LIMIT)
    )
    rows = conn.execute(stmt).mappings().all()
    return [LatestInvoice(**row) for row in rows]


def fetch_card_data(conn: Connection) -> CardData:
    invoice_count = conn.execute(select(func.count()).select_from(invoices)).scalar_one()
    customer_count = conn.execute(select(func.count()).select_from(customers)).scalar_one()

    status_stmt = select(
        func.coalesce(
            func.sum(case((invoices.c.status == "paid", invoices.c.amount), else_=0)), 0
        ).label("paid"),
        func.coalesce(
            func.sum(case((invoices.c.status == "pending", invoices.c.amount), else_=0)), 0
        ).label("pending"),
    )
    totals = conn.execute(status_stmt).first()

    return CardData(
        number_of_invoices=invoice_count,
        number_of_customers=customer_count,
        total_paid_invoices=int(totals.paid),
        total_pending_invoices=int(totals.pending),
    )


def _invoice_search(query: str):
    pattern = f"%{query}%"
    return or_(
        customers.c.name.ilike(pattern),
        customers.c.email.ilike(pattern),
        cast(invoices.c.amount, String).ilike(pattern),
        cast(invoices.c.date, String).ilike(pattern),
        invoices.c.status.ilike(pattern),
    )


def fetch_filtered_invoices(
    conn: Connection, query: str, current_page: int, items_per_page: int
) -> List[InvoicesTableRow]:
    offset = (current_page - 1) * items_per_page

    stmt = (
        select(
            invoices.c.id,
            invoices.c.customer_id,
            invoices.c.amount,
            invoices.c.date,
            invoices.c.status,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .select_from(invoices.join(customers))
        .where(_invoice_search(query))
        .order_by(invoices.c.date.desc(), invoices.c.id)
        .limit(items_per_page)
        .offset(offset)
    )
    rows = conn.execute(stmt).mappings().all()
    return [InvoicesTableRow(**row) for row in rows]


def fetch_invoices_pages(conn: Connection, query: str, items_per_page: int) -> int:
    count_stmt = (
        select(func.count())
        .select_from(invoices.join(customers))
        .where(_invoice_search(query))
    )
    total = conn.execute(count_stmt).scalar_one()
    return math.ceil(total / items_per_page)


def fetch_invoice_by_id(conn: Connection, invoice_id: str) -> Optional[InvoiceEditValues]:
    stmt = select(
        invoices.c.id,
        invoices.c.customer_id,
        invoices.c.amount,
        invoices.c.status,
    ).where(invoices.c.id == invoice_id)

    row = conn.execute(stmt).mappings().first()
    if row is None:
        return None

    # stored in cents, edited in dollars
    return InvoiceEditValues(
        id=row["id"],
        customer_id=row["customer_id"],
        amount=Decimal(row["amount"]) / 100,
        status=row["status"],
    )


def fetch_customers(conn: Connection) -> List[CustomerField]:
    stmt = select(customers.c.id, customers.c.name).order_by(customers.c.name)
    rows = conn.execute(stmt).mappings().all()
    return [CustomerField(**row) for row in rows]


def fetch_filtered_customers(conn: Connection, query: str) -> List[CustomersTableRow]:
    pattern = f"%{query}%"

    stmt = (
        select(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
            func.count(invoices.c.id).label("total_invoices"),
            func.coalesce(
                func.sum(case((invoices.c.status == "pending", invoices.c.amount), else_=0)), 0
            ).label("total_pending"),
            func.coalesce(
                func.sum(case((invoices.c.status == "paid", invoices.c.amount), else_=0)), 0
            ).label("total_paid"),
        )
        .select_from(customers.outerjoin(invoices))
        .where(or_(customers.c.name.ilike(pattern), customers.c.email.ilike(pattern)))
        .group_by(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .order_by(customers.c.name)
    )
    rows = conn.execute(stmt).mappings().all()
    return [CustomersTableRow(**row) for row in rows]


def fetch_customer_by_id(conn: Connection, customer_id: str) -> Optional[CustomerOut]:
    stmt = select(
        customers.c.id,
        customers.c.name,
        customers.c.email,
        customers.c.image_url,
    ).where(customers.c.id == customer_id)

    row = conn.execute(stmt).mappings().first()
    if row is None:
        return None
    return CustomerOut(**row)
