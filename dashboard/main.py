import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from dashboard.api.auth import router as auth_router
from dashboard.api.customers import router as customers_router
from dashboard.api.deps import LoginRequired, templates
from dashboard.api.invoices import router as invoices_router
from dashboard.api.overview import router as overview_router
from dashboard.config import DashboardSettings, get_settings

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: DashboardSettings = app.state.settings

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s  %(message)s",
    )
    logger.info("Starting invoices dashboard (database=%s)", settings.database_url)
    yield


def create_app(settings: Optional[DashboardSettings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Invoices Dashboard",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key.get_secret_value(),
        session_cookie="dashboard_session",
        same_site="lax",
    )
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        query = urlencode({"callbackUrl": exc.next_url})
        return RedirectResponse(f"/login?{query}", status_code=303)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code != 404:
            return await http_exception_handler(request, exc)
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"detail": exc.detail},
            status_code=404,
        )

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(overview_router)
    app.include_router(invoices_router)
    app.include_router(customers_router)

    return app


app = create_app()
