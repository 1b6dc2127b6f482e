from __future__ import annotations

from datetime import timedelta

from filegate.domain.users.entities import Session, User


def _user(login: str, clock) -> User:
    return User(id=0, login=login, password_hash="hash", created_at=clock.now)


def _session(user_id: int, token: str, clock, *, expires_in: int) -> Session:
    return Session(
        id=0,
        user_id=user_id,
        token=token,
        created_at=clock.now,
        expires_at=clock.now + timedelta(seconds=expires_in),
    )


def test_user_roundtrip_and_exact_login(app, container, clock):
    repo = container.user_repository
    stored = repo.add(_user("Alice", clock))

    assert stored.id > 0
    assert repo.find_by_login("Alice") == stored
    assert repo.find_by_login("alice") is None
    assert repo.find_by_login("Alice").created_at == clock.now


def test_session_lookup_and_sweep(app, container, clock):
    user = container.user_repository.add(_user("alice", clock))
    sessions = container.session_repository
    live = sessions.add(_session(user.id, "live", clock, expires_in=60))
    sessions.add(_session(user.id, "dead", clock, expires_in=-1))
    sessions.add(_session(user.id, "edge", clock, expires_in=0))

    found = sessions.find_by_token("live")
    assert found == live
    assert found.expires_at.tzinfo is not None

    assert sessions.delete_expired(clock.now) == 1
    assert sessions.find_by_token("dead") is None
    assert sessions.find_by_token("edge") is not None
    assert sessions.delete_expired(clock.now) == 0


def test_user_lists_session_ids(app, container, clock):
    users = container.user_repository
    user = users.add(_user("alice", clock))
    first = container.session_repository.add(_session(user.id, "t1", clock, expires_in=60))
    second = container.session_repository.add(_session(user.id, "t2", clock, expires_in=60))

    assert users.find_by_login("alice").session_ids == (first.id, second.id)


def test_revoke_and_delete_user(app, container, clock):
    users = container.user_repository
    sessions = container.session_repository
    user = users.add(_user("alice", clock))
    sessions.add(_session(user.id, "t1", clock, expires_in=60))
    sessions.add(_session(user.id, "t2", clock, expires_in=60))

    assert sessions.revoke("t1") == 1
    assert sessions.find_by_token("t1") is None

    users.delete(user.id)
    assert users.find_by_login("alice") is None
    assert sessions.find_by_token("t2") is None


def test_update_password_hash(app, container, clock):
    users = container.user_repository
    user = users.add(_user("alice", clock))

    users.update_password_hash(user.id, "new-hash")

    assert users.find_by_login("alice").password_hash == "new-hash"
