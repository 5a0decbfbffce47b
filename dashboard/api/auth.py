# dashboard/api/auth.py

from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.engine import Engine

from dashboard.actions.auth import DEFAULT_LOGIN_REDIRECT, authenticate, safe_redirect_target
from dashboard.api.deps import get_db_engine, templates
from dashboard.auth import SESSION_USER_KEY, sign_out

router = APIRouter(tags=["auth"])


@router.get("/", response_class=HTMLResponse)
def landing(request: Request):
    return templates.TemplateResponse(request, "index.html", {})


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request, callback_url: Optional[str] = Query(None, alias="callbackUrl")):
    # already signed in
    if request.session.get(SESSION_USER_KEY):
        return RedirectResponse(DEFAULT_LOGIN_REDIRECT, status_code=303)

    return templates.TemplateResponse(
        request,
        "login.html",
        {"redirect_to": safe_redirect_target(callback_url), "error": None, "email": ""},
    )


@router.post("/login")
def submit_login(
    request: Request,
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    redirect_to: Optional[str] = Form(None),
    engine: Engine = Depends(get_db_engine),
):
    result = authenticate(
        engine,
        request.session,
        {"email": email, "password": password, "redirect_to": redirect_to},
    )
    if isinstance(result, str):
        return templates.TemplateResponse(
            request,
            "login.html",
            {
                "redirect_to": safe_redirect_target(redirect_to),
                "error": result,
                "email": email or "",
            },
            status_code=401,
        )

    return RedirectResponse(result.url, status_code=303)


@router.post("/logout")
def logout(request: Request):
    sign_out(request.session)
    return RedirectResponse("/", status_code=303)
