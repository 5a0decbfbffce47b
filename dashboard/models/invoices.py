# dashboard/models/invoices.py

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Literal

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

INVOICE_STATUSES = ("pending", "paid")

# amounts are stored as cents in a 64-bit integer column
MAX_AMOUNT_IN_CENTS = 2 ** 63 - 1


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    """Fields accepted by the create and update invoice forms."""

    customer_id: str
    amount: Decimal
    status: Literal["pending", "paid"]

    @field_validator("customer_id", mode="before")
    @classmethod
    def _require_customer(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("customer_required", "Please select a customer.")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _require_positive_amount(cls, value):
        try:
            amount = Decimal(str(value).strip())
            cents = to_cents(amount) if amount.is_finite() else 0
        except InvalidOperation:
            cents = 0

        if not 0 < cents <= MAX_AMOUNT_IN_CENTS:
            raise PydanticCustomError(
                "amount_not_positive", "Please enter an amount greater than $0."
            )
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def _require_known_status(cls, value):
        if value not in INVOICE_STATUSES:
            raise PydanticCustomError("status_invalid", "Please select an invoice status.")
        return value

    @property
    def amount_in_cents(self) -> int:
        return to_cents(self.amount)


class InvoiceEditValues(BaseModel):
    """Invoice as shown in the edit form, amount in dollars."""

    id: str
    customer_id: str
    amount: Decimal
    status: str


class LatestInvoice(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    amount: int


class InvoicesTableRow(BaseModel):
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: date
    amount: int
    status: str


class InvoicesPage(BaseModel):
    items: List[InvoicesTableRow]
    query: str
    current_page: int
    total_pages: int


class CardData(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: int
    total_pending_invoices: int


class Revenue(BaseModel):
    month: str
    revenue: int


class OverviewData(BaseModel):
    cards: CardData
    revenue: List[Revenue]
    latest_invoices: List[LatestInvoice]
    y_axis_labels: List[str]
    top_label: int
