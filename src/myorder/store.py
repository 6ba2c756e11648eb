# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Credential store: persistence boundary for user records and password checks."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from myorder.auth.passwords import hash_password, verify_password
from myorder.database import UserRow
from myorder.errors import InvalidPasswordError, StoreError, UserNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    id: uuid.UUID
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: UserRow) -> "User":
        return cls(
            id=row.id,
            email=row.email,
            password_hash=row.password,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def to_dict(self) -> dict:
        # The hash never leaves the store.
        return {
            "id": str(self.id),
            "email": self.email,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class UserStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create_user(self, email: str, password: str) -> User:
        now = datetime.now(timezone.utc)
        row = UserRow(
            id=uuid.uuid4(),
            email=email,
            password=hash_password(password),
            created_at=now,
            updated_at=now,
        )
        with self._session_factory() as session:
            try:
                session.add(row)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.exception("Insert of user %s failed", email)
                raise StoreError(f"could not create user: {e}") from e
            return User.from_row(row)

    def get_user_by_email(self, email: str) -> User:
        with self._session_factory() as session:
            try:
                row = session.execute(
                    select(UserRow).where(UserRow.email == email)
                ).scalar_one_or_none()
            except SQLAlchemyError as e:
                logger.exception("Lookup of user %s failed", email)
                raise StoreError(f"could not load user: {e}") from e
        if row is None:
            raise UserNotFoundError(email)
        return User.from_row(row)

    def verify_password(self, password_hash: str, candidate: str) -> None:
        if not verify_password(password_hash, candidate):
            raise InvalidPasswordError("password does not match")
