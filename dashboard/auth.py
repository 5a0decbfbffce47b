# dashboard/auth.py
"""Credentials provider: user lookup, bcrypt password checks, session sign-in.

Sign-in failures are raised as :class:`AuthError` carrying a ``type`` so the
login action can tell bad credentials apart from everything else.  The
signed-in user id lives in the signed session cookie under ``user_id``.
"""

import logging
from functools import lru_cache
from typing import Any, Mapping, MutableMapping, Optional

import bcrypt
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from dashboard.db.schema import new_id, users
from dashboard.models.users import Credentials, UserOut

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"

CREDENTIALS_SIGNIN = "CredentialsSignin"
CALLBACK_ROUTE_ERROR = "CallbackRouteError"


class AuthError(Exception):
    """Raised when signing a user in fails."""

    def __init__(self, message: str, *, type: str = CALLBACK_ROUTE_ERROR) -> None:
        super().__init__(message)
        self.type = type


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))


@lru_cache
def _dummy_hash() -> str:
    return hash_password("dashboard-dummy-password")


def get_user(conn: Connection, email: str) -> Optional[Mapping[str, Any]]:
    stmt = select(users).where(users.c.email == email)
    return conn.execute(stmt).mappings().first()


def get_user_by_id(conn: Connection, user_id: str) -> Optional[UserOut]:
    stmt = select(users.c.id, users.c.name, users.c.email).where(users.c.id == user_id)
    row = conn.execute(stmt).mappings().first()
    return UserOut(**row) if row is not None else None


def create_user(conn: Connection, name: str, email: str, password: str) -> str:
    user_id = new_id()
    conn.execute(
        users.insert().values(
            id=user_id,
            name=name,
            email=email,
            password=hash_password(password),
        )
    )
    return user_id


def authorize(conn: Connection, credentials: Mapping[str, Any]) -> Optional[UserOut]:
    """
    Check an email/password pair.

    Returns the user, or None when the credentials are malformed, unknown
    or wrong.
    """
    try:
        parsed = Credentials.model_validate(
            {"email": credentials.get("email"), "password": credentials.get("password")}
        )
    except ValidationError:
        return None

    user = get_user(conn, parsed.email)
    if user is None:
        # keep response time the same whether or not the email exists
        verify_password(parsed.password, _dummy_hash())
        return None

    if not verify_password(parsed.password, user["password"]):
        return None

    return UserOut(id=user["id"], name=user["name"], email=user["email"])


def sign_in(
    engine: Engine,
    session: MutableMapping[str, Any],
    credentials: Mapping[str, Any],
) -> UserOut:
    try:
        with engine.connect() as conn:
            user = authorize(conn, credentials)
    except SQLAlchemyError as exc:
        logger.exception("User lookup failed during sign-in")
        raise AuthError("Failed to fetch user.", type=CALLBACK_ROUTE_ERROR) from exc

    if user is None:
        raise AuthError("Invalid credentials.", type=CREDENTIALS_SIGNIN)

    session[SESSION_USER_KEY] = user.id
    logger.info("User signed in: user=%s", user.id)
    return user


def sign_out(session: MutableMapping[str, Any]) -> None:
    session.clear()
