# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Credential checks and the session cookie.

``passwords`` hashes and verifies argon2 passwords; ``session`` owns the
``session=authenticated`` cookie that marks a signed-in browser.
"""
