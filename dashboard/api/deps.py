# dashboard/api/deps.py

from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.engine import Engine

from dashboard.auth import SESSION_USER_KEY, get_user_by_id
from dashboard.cache import PageCache
from dashboard.config import get_settings
from dashboard.db.engine import get_engine
from dashboard.models.users import UserOut
from dashboard.utils import format_currency, format_date_to_local

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["currency"] = format_currency
templates.env.filters["local_date"] = format_date_to_local

FLASH_KEY = "flash"


class LoginRequired(Exception):
    """Raised by the route guard; handled into a redirect to /login."""

    def __init__(self, next_url: str) -> None:
        super().__init__(next_url)
        self.next_url = next_url


def get_db_engine() -> Engine:
    return get_engine()


@lru_cache
def get_page_cache() -> PageCache:
    return PageCache(ttl_seconds=get_settings().page_cache_ttl)


def get_current_user(request: Request, engine: Engine = Depends(get_db_engine)) -> UserOut:
    """
    Route guard for dashboard pages.

    Stores the user on ``request.state.user`` for templates.
    """
    user_id = request.session.get(SESSION_USER_KEY)
    user = None
    if user_id:
        with engine.connect() as conn:
            user = get_user_by_id(conn, user_id)

    if user is None:
        request.session.pop(SESSION_USER_KEY, None)
        next_url = request.url.path
        if request.url.query:
            next_url = f"{next_url}?{request.url.query}"
        raise LoginRequired(next_url)

    request.state.user = user
    return user


def flash(request: Request, message: Optional[str]) -> None:
    if message:
        request.session[FLASH_KEY] = message


def pop_flash(request: Request) -> Optional[str]:
    return request.session.pop(FLASH_KEY, None)
