# dashboard/api/customers.py

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.engine import Engine

from dashboard.actions.customers import (
    add_customer,
    delete_customer,
    update_customer,
)
from dashboard.api.deps import (
    flash,
    get_current_user,
    get_db_engine,
    get_page_cache,
    pop_flash,
    templates,
)
from dashboard.cache import PageCache
from dashboard.db.queries import fetch_customer_by_id, fetch_filtered_customers
from dashboard.models.forms import FormState, Redirect
from dashboard.paths import CUSTOMERS_PATH

router = APIRouter(
    prefix=CUSTOMERS_PATH,
    tags=["customers"],
    dependencies=[Depends(get_current_user)],
)


def _render_form(
    request: Request,
    *,
    action: str,
    values: dict,
    state: Optional[FormState] = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "customers/form.html",
        {"action": action, "values": values, "state": state or FormState()},
        status_code=status_code,
    )


def _action_response(request: Request, result, *, action: str, values: dict):
    if isinstance(result, Redirect):
        return RedirectResponse(result.url, status_code=303)

    status_code = 422 if result.errors else 500
    return _render_form(
        request, action=action, values=values, state=result, status_code=status_code
    )


@router.get("", response_class=HTMLResponse)
def list_customers(
    request: Request,
    query: str = Query(""),
    engine: Engine = Depends(get_db_engine),
    cache: PageCache = Depends(get_page_cache),
):
    """
    Customers whose name or email matches ``query``, with invoice totals.
    """
    def load():
        with engine.connect() as conn:
            return fetch_filtered_customers(conn, query)

    rows = cache.get_or_load(CUSTOMERS_PATH, f"query={query}", load)

    return templates.TemplateResponse(
        request,
        "customers/list.html",
        {"customers": rows, "query": query, "flash": pop_flash(request)},
    )


@router.get("/create", response_class=HTMLResponse)
def create_customer_form(request: Request):
    return _render_form(request, action=f"{CUSTOMERS_PATH}/create", values={})


@router.post("/create")
def submit_add_customer(
    request: Request,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    engine: Engine = Depends(get_db_engine),
    cache: PageCache = Depends(get_page_cache),
):
    values = {"name": name, "email": email}
    result = add_customer(engine, values, cache)
    return _action_response(
        request, result, action=f"{CUSTOMERS_PATH}/create", values=values
    )


@router.get("/{customer_id}/edit", response_class=HTMLResponse)
def edit_customer_form(
    request: Request, customer_id: str, engine: Engine = Depends(get_db_engine)
):
    with engine.connect() as conn:
        customer = fetch_customer_by_id(conn, customer_id)

    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")

    return _render_form(
        request,
        action=f"{CUSTOMERS_PATH}/{customer_id}/edit",
        values=customer.model_dump(),
    )


@router.post("/{customer_id}/edit")
def submit_update_customer(
    request: Request,
    customer_id: str,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    engine: Engine = Depends(get_db_engine),
    cache: PageCache = Depends(get_page_cache),
):
    values = {"name": name, "email": email}
    result = update_customer(engine, customer_id, values, cache)
    return _action_response(
        request,
        result,
        action=f"{CUSTOMERS_PATH}/{customer_id}/edit",
        values={"id": customer_id, **values},
    )


@router.post("/{customer_id}/delete")
def submit_delete_customer(
    request: Request,
    customer_id: str,
    engine: Engine = Depends(get_db_engine),
    cache: PageCache = Depends(get_page_cache),
):
    state = delete_customer(engine, customer_id, cache)
    flash(request, state.message)
    return RedirectResponse(CUSTOMERS_PATH, status_code=303)
