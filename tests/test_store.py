import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from myorder.database import UserRow, session_factory
from myorder.errors import InvalidPasswordError, StoreError, UserNotFoundError
from myorder.store import UserStore


def _rows_for(engine, email):
    with session_factory(engine)() as s:
        return s.execute(select(func.count()).select_from(UserRow).where(UserRow.email == email)).scalar_one()


def test_create_user_returns_record(store):
    user = store.create_user("a@x.com", "pw")
    assert isinstance(user.id, uuid.UUID)
    assert user.email == "a@x.com"
    assert user.password_hash and user.password_hash != "pw"
    assert user.created_at == user.updated_at


def test_hash_is_not_exposed(store):
    user = store.create_user("a@x.com", "pw")
    assert "password" not in repr(user)
    d = user.to_dict()
    assert set(d) == {"id", "email", "created_at", "updated_at"}
    assert user.password_hash not in d.values()


def test_ids_are_unique(store):
    assert store.create_user("a@x.com", "pw").id != store.create_user("b@x.com", "pw").id


def test_get_user_by_email(store):
    created = store.create_user("a@x.com", "pw")
    found = store.get_user_by_email("a@x.com")
    assert found.id == created.id
    assert found.password_hash == created.password_hash


def test_get_unknown_email_is_not_found(store):
    with pytest.raises(UserNotFoundError):
        store.get_user_by_email("nobody@x.com")


def test_duplicate_insert_fails_and_keeps_one_row(store, engine):
    store.create_user("a@x.com", "pw")
    with pytest.raises(StoreError):
        store.create_user("a@x.com", "other")
    assert _rows_for(engine, "a@x.com") == 1


def test_verify_password(store):
    user = store.create_user("a@x.com", "pw")
    store.verify_password(user.password_hash, "pw")
    with pytest.raises(InvalidPasswordError):
        store.verify_password(user.password_hash, "nope")
    with pytest.raises(InvalidPasswordError):
        store.verify_password("garbage", "pw")


def test_storage_failure_is_generic_store_error():
    class _Broken:
        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def execute(self, *a, **kw):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

    store = UserStore(lambda: _Broken())
    with pytest.raises(StoreError) as ei:
        store.get_user_by_email("a@x.com")
    assert not isinstance(ei.value, UserNotFoundError)
