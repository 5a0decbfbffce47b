# dashboard/api/overview.py

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.engine import Engine

from dashboard.api.deps import get_current_user, get_db_engine, get_page_cache, templates
from dashboard.cache import PageCache
from dashboard.db.queries import fetch_card_data, fetch_latest_invoices, fetch_revenue
from dashboard.models.invoices import OverviewData
from dashboard.paths import OVERVIEW_PATH
from dashboard.utils import generate_y_axis

router = APIRouter(tags=["overview"], dependencies=[Depends(get_current_user)])


@router.get(OVERVIEW_PATH, response_class=HTMLResponse)
def overview(
    request: Request,
    engine: Engine = Depends(get_db_engine),
    cache: PageCache = Depends(get_page_cache),
):
    """
    Summary cards, monthly revenue chart and the latest invoices.
    """
    def load() -> OverviewData:
        with engine.connect() as conn:
            revenue = fetch_revenue(conn)
            y_axis_labels, top_label = generate_y_axis(revenue)
            return OverviewData(
                cards=fetch_card_data(conn),
                revenue=revenue,
                latest_invoices=fetch_latest_invoices(conn),
                y_axis_labels=y_axis_labels,
                top_label=top_label,
            )

    data = cache.get_or_load(OVERVIEW_PATH, "", load)
    return templates.TemplateResponse(request, "dashboard/overview.html", {"data": data})
