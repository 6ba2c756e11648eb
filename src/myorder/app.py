# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Union

from fastapi import APIRouter, Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from myorder.auth.session import clear_session_cookie, is_authenticated, set_session_cookie
from myorder.errors import InvalidPasswordError, StoreError, UserNotFoundError
from myorder.permissions import LANDING_URL, require_session
from myorder.store import UserStore

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
TEMPLATE_NAMES = ("landing.html", "register.html", "index.html")

INDEX_URL = "/index.html"
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]

MSG_FIELDS_REQUIRED = "Email and password are required"
MSG_EMAIL_TAKEN = "Email already registered. Please use a different email or login."
MSG_INVALID_CREDENTIALS = "Invalid email or password"
MSG_CREATE_FAILED = "Failed to create user"


@dataclass
class PageData:
    error: str = ""
    email: str = ""


router = APIRouter()


def _store(request: Request) -> UserStore:
    return request.app.state.store


def _render(request: Request, template_name: str, page: Optional[PageData] = None):
    """Render a template, turning any rendering failure into a plain 500."""
    templates: Jinja2Templates = request.app.state.templates
    ctx = {"page": asdict(page or PageData())}
    try:
        return templates.TemplateResponse(request, template_name, ctx)
    except Exception as e:
        logger.exception("Rendering %s failed", template_name)
        return PlainTextResponse(str(e), status_code=500)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


# ------------------ Routes ------------------
# Registration order matters: the first matching path/method wins.


@router.api_route("/", methods=ALL_METHODS, response_class=HTMLResponse)
def landing(request: Request):
    if is_authenticated(request):
        return _redirect(INDEX_URL)
    return _render(request, "landing.html")


@router.post("/login", response_class=HTMLResponse)
def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
):
    store = _store(request)
    try:
        user = store.get_user_by_email(email)
    except StoreError:
        # Unknown email and lookup failures look the same to the visitor.
        return landing(request)

    try:
        store.verify_password(user.password_hash, password)
    except InvalidPasswordError:
        logger.info("Failed login for %s", email)
        return _render(request, "landing.html", PageData(error=MSG_INVALID_CREDENTIALS, email=email))

    resp = _redirect(INDEX_URL)
    set_session_cookie(resp)
    return resp


@router.api_route("/login", methods=[m for m in ALL_METHODS if m != "POST"])
def login_other_methods():
    raise HTTPException(status_code=404, detail="Not Found")


@router.post("/register", response_class=HTMLResponse)
def register(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
):
    if not email or not password:
        return PlainTextResponse(MSG_FIELDS_REQUIRED, status_code=400)

    store = _store(request)
    try:
        store.get_user_by_email(email)
    except UserNotFoundError:
        pass
    except StoreError:
        return PlainTextResponse(MSG_CREATE_FAILED, status_code=500)
    else:
        return _render(request, "register.html", PageData(error=MSG_EMAIL_TAKEN, email=email))

    try:
        store.create_user(email, password)
    except StoreError:
        return PlainTextResponse(MSG_CREATE_FAILED, status_code=500)

    logger.info("Registered user %s", email)
    # Registration does not sign the visitor in.
    return _redirect(LANDING_URL)


@router.get("/register", response_class=HTMLResponse)
def show_register(request: Request):
    return _render(request, "register.html")


@router.api_route("/logout", methods=ALL_METHODS)
def logout(request: Request):
    resp = _redirect(LANDING_URL)
    clear_session_cookie(resp)
    return resp


@router.api_route(
    INDEX_URL,
    methods=ALL_METHODS,
    response_class=HTMLResponse,
    dependencies=[Depends(require_session)],
)
def index(request: Request):
    if not is_authenticated(request):
        return _redirect(LANDING_URL)
    return _render(request, "index.html")


async def _http_error_as_text(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def load_templates(directory: Union[str, Path]) -> Jinja2Templates:
    """Load every page template up front; a missing or broken one raises."""
    templates = Jinja2Templates(directory=str(directory))
    for name in TEMPLATE_NAMES:
        templates.get_template(name)
    return templates


def create_app(store: UserStore, templates_dir: Union[str, Path, None] = None) -> FastAPI:
    # Paths match exactly: "/logout/" is a 404, not a redirect to "/logout".
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None, redirect_slashes=False)
    app.state.store = store
    app.state.templates = load_templates(templates_dir or TEMPLATES_DIR)
    app.add_exception_handler(StarletteHTTPException, _http_error_as_text)
    app.include_router(router)
    return app
