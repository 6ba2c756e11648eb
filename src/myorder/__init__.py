# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""myorder: registration, login and a cookie-gated page."""

__version__ = "0.1.0"
