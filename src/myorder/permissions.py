# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from fastapi import HTTPException, Request

from myorder.auth.session import is_authenticated

LANDING_URL = "/"


def require_session(request: Request) -> None:
    """Route guard: anonymous visitors are sent back to the landing page."""
    if is_authenticated(request):
        return
    raise HTTPException(status_code=303, headers={"Location": LANDING_URL})
