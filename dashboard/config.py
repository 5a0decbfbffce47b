# dashboard/config.py
"""Dashboard settings loaded from environment variables."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardSettings(BaseSettings):
    """
    Application settings.

    Every value can be overridden with a ``DASHBOARD_`` prefixed environment
    variable (e.g. ``DASHBOARD_DATABASE_URL``) or through a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    database_url: str = "sqlite:///db.sqlite"  # file in project root
    debug: bool = False

    # Signs the session cookie.
    secret_key: SecretStr = SecretStr("dashboard-dev-secret-change-in-production")

    # Rows per page on the invoices table.
    items_per_page: int = 6

    # Seconds before cached page data goes stale on its own.
    page_cache_ttl: int = 60

    # Invoice creation dates are taken in this zone.
    timezone: str = "UTC"

    customer_image_url: str = "/static/customers/placeholder.svg"


@lru_cache
def get_settings() -> DashboardSettings:
    return DashboardSettings()
