# dashboard/actions/auth.py

from typing import Any, Mapping, MutableMapping, Optional, Union

from sqlalchemy.engine import Engine

from dashboard.auth import CREDENTIALS_SIGNIN, AuthError, sign_in
from dashboard.models.forms import Redirect

DEFAULT_LOGIN_REDIRECT = "/dashboard"


def safe_redirect_target(target: Optional[str]) -> str:
    """Only follow local paths after login."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return DEFAULT_LOGIN_REDIRECT
    return target


def authenticate(
    engine: Engine,
    session: MutableMapping[str, Any],
    form_data: Mapping[str, Any],
) -> Union[str, Redirect]:
    """
    Sign in from the login form.

    Returns an error string for the form, or where to send the user.
    Errors that are not AuthError propagate.
    """
    try:
        sign_in(engine, session, form_data)
    except AuthError as exc:
        if exc.type == CREDENTIALS_SIGNIN:
            return "Invalid credentials."
        return "Something went wrong."

    return Redirect(url=safe_redirect_target(form_data.get("redirect_to")))
