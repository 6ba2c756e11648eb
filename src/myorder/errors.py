# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations


class AppError(Exception):
    """Base class for errors raised by myorder."""


class ConfigError(AppError):
    pass


class StoreError(AppError):
    """The credential store could not complete an operation."""


class UserNotFoundError(StoreError):
    def __init__(self, email: str = ""):
        super().__init__("user not found")
        self.email = email


class InvalidPasswordError(AppError):
    pass
