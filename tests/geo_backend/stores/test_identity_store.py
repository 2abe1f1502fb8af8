import pytest

from geo_backend.core.errors import DuplicateIdentityError
from geo_backend.models.user import Role, User
from geo_backend.stores import identity_store


def test_create_user_forces_default_role(db_session) -> None:
    user = identity_store.create_user(db_session, 'a@x.com', 'p1')

    assert user.role == 'user'
    assert len(user.id) == 32


def test_create_user_rejects_duplicate_email_and_keeps_first_account(db_session) -> None:
    first = identity_store.create_user(db_session, 'a@x.com', 'p1')

    with pytest.raises(DuplicateIdentityError):
        identity_store.create_user(db_session, 'a@x.com', 'other')

    stored = db_session.query(User).filter(User.email == 'a@x.com').all()
    assert [user.id for user in stored] == [first.id]
    assert stored[0].password == 'p1'


def test_create_user_maps_unique_violation_to_duplicate(db_session, monkeypatch: pytest.MonkeyPatch) -> None:
    identity_store.create_user(db_session, 'a@x.com', 'p1')
    # simulate a concurrent request that passed the existence check
    monkeypatch.setattr(identity_store, 'find_by_email', lambda db, email: None)

    with pytest.raises(DuplicateIdentityError):
        identity_store.create_user(db_session, 'a@x.com', 'p2')

    assert db_session.query(User).count() == 1


def test_find_by_credentials_requires_exact_password(db_session) -> None:
    identity_store.create_user(db_session, 'a@x.com', 'p1')

    assert identity_store.find_by_credentials(db_session, 'a@x.com', 'p1') is not None
    assert identity_store.find_by_credentials(db_session, 'a@x.com', 'P1') is None


def test_update_role_returns_none_for_unknown_user(db_session) -> None:
    assert identity_store.update_role(db_session, 'missing', Role.ADMIN) is None


def test_update_role_overwrites_role(db_session) -> None:
    user = identity_store.create_user(db_session, 'a@x.com', 'p1')

    updated = identity_store.update_role(db_session, user.id, Role.ADMIN)

    assert updated.role == 'admin'
    assert updated.is_admin


def test_delete_user(db_session) -> None:
    user = identity_store.create_user(db_session, 'a@x.com', 'p1')

    assert identity_store.delete_user(db_session, user.id) is True
    assert identity_store.delete_user(db_session, user.id) is False
    assert identity_store.list_users(db_session) == []
