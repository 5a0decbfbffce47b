"""Tests for dashboard/actions/customers.py"""

import uuid

import pytest
from sqlalchemy import select

from dashboard.actions.customers import (
    CUSTOMERS_PATH,
    add_customer,
    delete_customer,
    update_customer,
)
from dashboard.config import get_settings
from dashboard.db.schema import customers
from dashboard.models.forms import FormState, Redirect
from dashboard.paths import DATA_PATHS

from conftest import CUSTOMER_ID, OTHER_CUSTOMER_ID


def _customer_rows(engine):
    with engine.connect() as conn:
        return conn.execute(select(customers).order_by(customers.c.name)).mappings().all()


def _warm(cache, path=CUSTOMERS_PATH):
    cache.get_or_load(path, "query=", lambda: "cached")


class TestAddCustomer:
    def test_inserts_with_generated_id_and_placeholder_image(self, engine, cache):
        _warm(cache)

        result = add_customer(engine, {"name": "Evil Rabbit", "email": "evil@rabbit.com"}, cache)

        assert result == Redirect(url="/dashboard/customers")
        rows = _customer_rows(engine)
        assert len(rows) == 1
        assert rows[0]["name"] == "Evil Rabbit"
        assert rows[0]["email"] == "evil@rabbit.com"
        assert rows[0]["image_url"] == get_settings().customer_image_url
        assert uuid.UUID(rows[0]["id"])
        assert len(cache) == 0

    def test_image_url_from_form_is_ignored(self, engine, cache):
        add_customer(
            engine,
            {"name": "Evil Rabbit", "email": "evil@rabbit.com", "image_url": "http://evil.test/x.png"},
            cache,
        )

        assert _customer_rows(engine)[0]["image_url"] == get_settings().customer_image_url

    def test_rejects_single_character_name(self, engine, cache):
        result = add_customer(engine, {"name": "E", "email": "evil@rabbit.com"}, cache)

        assert result.errors == {"name": ["Name must have at least 2 characters."]}
        assert result.message == "Missing Fields. Failed to Add Customer."
        assert _customer_rows(engine) == []

    @pytest.mark.parametrize(
        "email",
        ["plainaddress", "evil@rabbit", "evil@rabbit.c", "@rabbit.com", "evil rabbit@x.com", "", None],
    )
    def test_rejects_malformed_email(self, engine, cache, email):
        result = add_customer(engine, {"name": "Evil Rabbit", "email": email}, cache)

        assert result.errors == {"email": ["Please enter a valid email."]}

    @pytest.mark.parametrize("email", ["EVIL@RABBIT.COM", "first.last+tag@mail.example.co"])
    def test_accepts_well_formed_email(self, engine, cache, email):
        result = add_customer(engine, {"name": "Evil Rabbit", "email": email}, cache)

        assert isinstance(result, Redirect)

    def test_reports_both_fields(self, engine, cache):
        result = add_customer(engine, {}, cache)

        assert set(result.errors) == {"name", "email"}


class TestUpdateCustomer:
    def test_replaces_name_and_email(self, engine, cache, customer_ids):
        _warm(cache)

        result = update_customer(
            engine, CUSTOMER_ID, {"name": "Delba O.", "email": "delba@example.com"}, cache
        )

        assert result == Redirect(url="/dashboard/customers")
        row = next(r for r in _customer_rows(engine) if r["id"] == CUSTOMER_ID)
        assert row["name"] == "Delba O."
        assert row["email"] == "delba@example.com"
        assert len(cache) == 0

    def test_revalidates_invoice_pages_showing_the_name(self, engine, cache, customer_ids):
        for path in DATA_PATHS:
            _warm(cache, path)

        update_customer(engine, CUSTOMER_ID, {"name": "Delba O.", "email": "delba@example.com"}, cache)

        assert len(cache) == 0

    def test_invalid_form(self, engine, cache, customer_ids):
        result = update_customer(engine, CUSTOMER_ID, {"name": "D", "email": "nope"}, cache)

        assert result.message == "Missing Fields. Failed to Update Customer."
        assert result.errors == {
            "name": ["Name must have at least 2 characters."],
            "email": ["Please enter a valid email."],
        }


class TestDeleteCustomer:
    def test_deletes_customer_without_invoices(self, engine, cache, customer_ids):
        result = delete_customer(engine, OTHER_CUSTOMER_ID, cache)

        assert result == FormState(message="Deleted Customer.")
        assert [r["id"] for r in _customer_rows(engine)] == [CUSTOMER_ID]

    def test_customer_with_invoices_is_a_database_error(self, engine, cache, invoice_id):
        _warm(cache)

        result = delete_customer(engine, CUSTOMER_ID, cache)

        assert result == FormState(message="Database Error: Failed to Delete Customer.")
        assert len(_customer_rows(engine)) == 2
        assert len(cache) == 1

    def test_missing_id_is_harmless(self, engine, cache, customer_ids):
        result = delete_customer(engine, "does-not-exist", cache)

        assert result.message == "Deleted Customer."
        assert len(_customer_rows(engine)) == 2
