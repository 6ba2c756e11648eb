#!/usr/bin/env python3
from __future__ import annotations

import argparse
from getpass import getpass

from myorder.config import load_settings
from myorder.database import connect, create_schema, session_factory
from myorder.errors import UserNotFoundError
from myorder.store import UserStore


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a myorder user.")
    parser.add_argument("--init-schema", action="store_true", help="create the users table first")
    args = parser.parse_args()

    engine = connect(load_settings().database_url)
    try:
        if args.init_schema:
            create_schema(engine)
        store = UserStore(session_factory(engine))

        email = input("Email: ").strip()
        if not email:
            raise SystemExit("Email is required")
        try:
            store.get_user_by_email(email)
        except UserNotFoundError:
            pass
        else:
            raise SystemExit(f"{email} is already registered")

        pw1 = getpass("Password: ")
        pw2 = getpass("Repeat password: ")
        if not pw1:
            raise SystemExit("Password is required")
        if pw1 != pw2:
            raise SystemExit("Passwords do not match")

        user = store.create_user(email, pw1)
        print(f"OK -> {user.email} ({user.id})")
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
