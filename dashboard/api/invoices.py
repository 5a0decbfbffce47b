# dashboard/api/invoices.py

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.engine import Engine

from dashboard.actions.invoices import (
    create_invoice,
    delete_invoice,
    update_invoice,
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
from dashboard.config import DashboardSettings, get_settings
from dashboard.db.queries import (
    fetch_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)
from dashboard.models.forms import FormState, Redirect
from dashboard.models.invoices import InvoicesPage
from dashboard.paths import INVOICES_PATH
from dashboard.utils import generate_pagination

router = APIRouter(
    prefix=INVOICES_PATH,
    tags=["invoices"],
    dependencies=[Depends(get_current_user)],
)


def _render_form(
    request: Request,
    engine: Engine,
    *,
    action: str,
    values: dict,
    state: Optional[FormState] = None,
    status_code: int = 200,
) -> HTMLResponse:
    with engine.connect() as conn:
        customers = fetch_customers(conn)

    return templates.TemplateResponse(
        request,
        "invoices/form.html",
        {
            "action": action,
            "customers": customers,
            "values": values,
            "state": state or FormState(),
        },
        status_code=status_code,
    )


def _action_response(request: Request, engine: Engine, result, *, action: str, values: dict):
    if isinstance(result, Redirect):
        return RedirectResponse(result.url, status_code=303)

    status_code = 422 if result.errors else 500
    return _render_form(
        request, engine, action=action, values=values, state=result, status_code=status_code
    )


@router.get("", response_class=HTMLResponse)
def list_invoices(
    request: Request,
    query: str = Query(""),
    page: int = Query(1),
    engine: Engine = Depends(get_db_engine),
    cache: PageCache = Depends(get_page_cache),
    settings: DashboardSettings = Depends(get_settings),
):
    """
    Invoices table filtered by ``query``, newest first.
    """
    current_page = max(page, 1)

    def load() -> InvoicesPage:
        with engine.connect() as conn:
            return InvoicesPage(
                items=fetch_filtered_invoices(
                    conn, query, current_page, settings.items_per_page
                ),
                query=query,
                current_page=current_page,
                total_pages=fetch_invoices_pages(conn, query, settings.items_per_page),
            )

    data = cache.get_or_load(INVOICES_PATH, f"query={query}&page={current_page}", load)

    return templates.TemplateResponse(
        request,
        "invoices/list.html",
        {
            "data": data,
            "pagination": generate_pagination(data.current_page, data.total_pages),
            "flash": pop_flash(request),
        },
    )


@router.get("/create", response_class=HTMLResponse)
def create_invoice_form(request: Request, engine: Engine = Depends(get_db_engine)):
    return _render_form(request, engine, action=f"{INVOICES_PATH}/create", values={})


@router.post("/create")
def submit_create_invoice(
    request: Request,
    customer_id: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    engine: Engine = Depends(get_db_engine),
    cache: PageCache = Depends(get_page_cache),
):
    values = {"customer_id": customer_id, "amount": amount, "status": status}
    result = create_invoice(engine, values, cache)
    return _action_response(
        request, engine, result, action=f"{INVOICES_PATH}/create", values=values
    )


@router.get("/{invoice_id}/edit", response_class=HTMLResponse)
def edit_invoice_form(
    request: Request, invoice_id: str, engine: Engine = Depends(get_db_engine)
):
    with engine.connect() as conn:
        invoice = fetch_invoice_by_id(conn, invoice_id)

    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return _render_form(
        request,
        engine,
        action=f"{INVOICES_PATH}/{invoice_id}/edit",
        values=invoice.model_dump(),
    )


@router.post("/{invoice_id}/edit")
def submit_update_invoice(
    request: Request,
    invoice_id: str,
    customer_id: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    engine: Engine = Depends(get_db_engine),
    cache: PageCache = Depends(get_page_cache),
):
    values = {"customer_id": customer_id, "amount": amount, "status": status}
    result = update_invoice(engine, invoice_id, values, cache)
    return _action_response(
        request,
        engine,
        result,
        action=f"{INVOICES_PATH}/{invoice_id}/edit",
        values={"id": invoice_id, **values},
    )


@router.post("/{invoice_id}/delete")
def submit_delete_invoice(
    request: Request,
    invoice_id: str,
    engine: Engine = Depends(get_db_engine),
    cache: PageCache = Depends(get_page_cache),
):
    state = delete_invoice(engine, invoice_id, cache)
    flash(request, state.message)
    return RedirectResponse(INVOICES_PATH, status_code=303)
