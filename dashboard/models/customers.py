# dashboard/models/customers.py

import re

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

EMAIL_RE = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)


class CustomerForm(BaseModel):
    """Fields accepted by the add and update customer forms."""

    name: str
    email: str

    @field_validator("name", mode="before")
    @classmethod
    def _require_name(cls, value):
        if not isinstance(value, str) or len(value) < 2:
            raise PydanticCustomError("name_too_short", "Name must have at least 2 characters.")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _require_email(cls, value):
        if not isinstance(value, str) or not EMAIL_RE.match(value):
            raise PydanticCustomError("email_invalid", "Please enter a valid email.")
        return value


class CustomerField(BaseModel):
    """Customer entry in the invoice form's select box."""

    id: str
    name: str


class CustomerOut(BaseModel):
    id: str
    name: str
    email: str
    image_url: str

    class Config:
        from_attributes = True


class CustomersTableRow(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: int
    total_paid: int
