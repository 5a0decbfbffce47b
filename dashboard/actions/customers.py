# dashboard/actions/customers.py

import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from dashboard.cache import PageCache
from dashboard.config import get_settings
from dashboard.db.schema import customers, new_id
from dashboard.models.customers import CustomerForm
from dashboard.models.forms import FormState, Redirect, flatten_errors
from dashboard.paths import CUSTOMERS_PATH, DATA_PATHS

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = ("name", "email")


def _revalidate(cache: PageCache) -> None:
    # customer names and images show on the invoice pages as well
    for path in DATA_PATHS:
        cache.revalidate_path(path)


def _validate(form_data: Mapping[str, Any]) -> CustomerForm:
    return CustomerForm.model_validate({k: form_data.get(k) for k in CUSTOMER_FIELDS})


def _insert_ignoring_conflict(dialect_name: str, values: dict):
    """INSERT ... ON CONFLICT (id) DO NOTHING for the running dialect."""
    insert = postgresql_insert if dialect_name == "postgresql" else sqlite_insert
    stmt = insert(customers).values(**values)
    return stmt.on_conflict_do_nothing(index_elements=[customers.c.id])


def add_customer(
    engine: Engine, form_data: Mapping[str, Any], cache: PageCache
) -> Union[FormState, Redirect]:
    try:
        form = _validate(form_data)
    except ValidationError as exc:
        return FormState(
            errors=flatten_errors(exc),
            message="Missing Fields. Failed to Add Customer.",
        )

    values = {
        "id": new_id(),
        "name": form.name,
        "email": form.email,
        "image_url": get_settings().customer_image_url,
    }

    try:
        with engine.begin() as conn:
            conn.execute(_insert_ignoring_conflict(conn.dialect.name, values))
    except SQLAlchemyError:
        logger.exception("Failed to add customer %r", form.name)
        return FormState(message="Database Error: Failed to Add Customer.")

    _revalidate(cache)
    return Redirect(url=CUSTOMERS_PATH)


def update_customer(
    engine: Engine, customer_id: str, form_data: Mapping[str, Any], cache: PageCache
) -> Union[FormState, Redirect]:
    try:
        form = _validate(form_data)
    except ValidationError as exc:
        return FormState(
            errors=flatten_errors(exc),
            message="Missing Fields. Failed to Update Customer.",
        )

    try:
        with engine.begin() as conn:
            conn.execute(
                customers.update()
                .where(customers.c.id == customer_id)
                .values(name=form.name, email=form.email)
            )
    except SQLAlchemyError:
        logger.exception("Failed to update customer %s", customer_id)
        return FormState(message="Database Error: Failed to Update Customer.")

    _revalidate(cache)
    return Redirect(url=CUSTOMERS_PATH)


def delete_customer(engine: Engine, customer_id: str, cache: PageCache) -> FormState:
    try:
        with engine.begin() as conn:
            conn.execute(customers.delete().where(customers.c.id == customer_id))
    except SQLAlchemyError:
        # usually invoices still pointing at the customer
        logger.exception("Failed to delete customer %s", customer_id)
        return FormState(message="Database Error: Failed to Delete Customer.")

    _revalidate(cache)
    return FormState(message="Deleted Customer.")
