# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Session cookie contract.

There is no server-side session table: a request is authenticated when it
carries the ``session`` cookie with the literal value ``authenticated``.
"""

from __future__ import annotations

from fastapi import Request
from starlette.responses import Response

COOKIE_NAME = "session"
SESSION_VALUE = "authenticated"
SESSION_MAX_AGE = 24 * 60 * 60  # 24 hours


def _cookie_settings() -> dict:
    return {"path": "/", "httponly": True, "secure": True, "samesite": "strict"}


def is_authenticated(request: Request) -> bool:
    return request.cookies.get(COOKIE_NAME) == SESSION_VALUE


def set_session_cookie(response: Response) -> None:
    response.set_cookie(
        COOKIE_NAME,
        SESSION_VALUE,
        max_age=SESSION_MAX_AGE,
        **_cookie_settings(),
    )


def clear_session_cookie(response: Response) -> None:
    # Max-Age=-1 tells the browser to drop the cookie immediately.
    response.set_cookie(COOKIE_NAME, "", max_age=-1, **_cookie_settings())
