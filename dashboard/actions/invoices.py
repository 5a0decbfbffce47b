# dashboard/actions/invoices.py
"""
Invoice form actions.

Each action validates the submitted form, issues a single statement,
revalidates the cached pages built from invoice rows and hands back
where to go next. Failures come back as a FormState instead of an exception.
"""

import logging
from datetime import date, datetime
from typing import Any, Mapping, Union

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from zoneinfo import ZoneInfo

from dashboard.cache import PageCache
from dashboard.config import get_settings
from dashboard.db.schema import invoices
from dashboard.models.forms import FormState, Redirect, flatten_errors
from dashboard.models.invoices import InvoiceForm
from dashboard.paths import DATA_PATHS, INVOICES_PATH

logger = logging.getLogger(__name__)

INVOICE_FIELDS = ("customer_id", "amount", "status")


def _today() -> date:
    return datetime.now(ZoneInfo(get_settings().timezone)).date()


def _revalidate(cache: PageCache) -> None:
    # invoice rows feed the overview cards and the customer totals too
    for path in DATA_PATHS:
        cache.revalidate_path(path)


def _validate(form_data: Mapping[str, Any]) -> InvoiceForm:
    return InvoiceForm.model_validate({k: form_data.get(k) for k in INVOICE_FIELDS})


def create_invoice(
    engine: Engine, form_data: Mapping[str, Any], cache: PageCache
) -> Union[FormState, Redirect]:
    try:
        form = _validate(form_data)
    except ValidationError as exc:
        return FormState(
            errors=flatten_errors(exc),
            message="Missing Fields. Failed to Create Invoice.",
        )

    try:
        with engine.begin() as conn:
            conn.execute(
                invoices.insert().values(
                    customer_id=form.customer_id,
                    amount=form.amount_in_cents,
                    status=form.status,
                    date=_today(),
                )
            )
    except SQLAlchemyError:
        logger.exception("Failed to create invoice for customer %s", form.customer_id)
        return FormState(message="Database Error: Failed to Create Invoice.")

    _revalidate(cache)
    return Redirect(url=INVOICES_PATH)


def update_invoice(
    engine: Engine, invoice_id: str, form_data: Mapping[str, Any], cache: PageCache
) -> Union[FormState, Redirect]:
    try:
        form = _validate(form_data)
    except ValidationError as exc:
        return FormState(
            errors=flatten_errors(exc),
            message="Missing Fields. Failed to Update Invoice.",
        )

    try:
        with engine.begin() as conn:
            conn.execute(
                invoices.update()
                .where(invoices.c.id == invoice_id)
                .values(
                    customer_id=form.customer_id,
                    amount=form.amount_in_cents,
                    status=form.status,
                )
            )
    except SQLAlchemyError:
        logger.exception("Failed to update invoice %s", invoice_id)
        return FormState(message="Database Error: Failed to Update Invoice.")

    _revalidate(cache)
    return Redirect(url=INVOICES_PATH)


def delete_invoice(engine: Engine, invoice_id: str, cache: PageCache) -> FormState:
    try:
        with engine.begin() as conn:
            conn.execute(invoices.delete().where(invoices.c.id == invoice_id))
    except SQLAlchemyError:
        logger.exception("Failed to delete invoice %s", invoice_id)
        return FormState(message="Database Error: Failed to Delete Invoice.")

    _revalidate(cache)
    return FormState(message="Deleted Invoice.")
