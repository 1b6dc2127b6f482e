from __future__ import annotations

from datetime import timedelta

import pytest
from jose import jwt

from filegate.application.services.tokens import TokenService
from filegate.domain.users.exceptions import InvalidTokenError
from filegate.shared.clock import utc_now

from conftest import LIFETIME, TEST_SECRET, FixedClock


def test_token_valid_until_last_second_of_lifetime(tokens, clock):
    token = tokens.issue(7, LIFETIME)

    assert tokens.verify(token).user_id == 7
    clock.advance(LIFETIME - 1)
    assert tokens.verify(token).user_id == 7


def test_token_rejected_exactly_at_expiry(tokens, clock):
    token = tokens.issue(7, LIFETIME)
    clock.advance(LIFETIME)

    with pytest.raises(InvalidTokenError) as exc:
        tokens.verify(token)
    assert exc.value.context == {"reason": "expired"}
    assert exc.value.status == 401


def test_claims_carry_issue_and_expiry(tokens, clock):
    claims = tokens.verify(tokens.issue(3, 60))

    assert claims.issued_at == clock.now
    assert (claims.expires_at - claims.issued_at).total_seconds() == 60


def test_payload_shape(tokens, clock):
    token = tokens.issue(5, LIFETIME)
    payload = jwt.get_unverified_claims(token)

    assert payload["data"] == {"userId": 5}
    assert payload["exp"] - payload["iat"] == LIFETIME
    assert payload["iat"] == int(clock.now.timestamp())


def test_tampered_token_rejected(tokens):
    token = tokens.issue(1, LIFETIME)
    header, payload, signature = token.split(".")
    flipped = "A" if signature[0] != "A" else "B"

    with pytest.raises(InvalidTokenError):
        tokens.verify(".".join([header, payload, flipped + signature[1:]]))


def test_token_signed_with_other_secret_rejected(tokens, clock):
    foreign = TokenService("another-secret", clock=clock).issue(1, LIFETIME)

    with pytest.raises(InvalidTokenError) as exc:
        tokens.verify(foreign)
    assert exc.value.context == {"reason": "invalid"}


def test_garbage_token_rejected(tokens):
    with pytest.raises(InvalidTokenError):
        tokens.verify("not-a-jwt")


def test_token_without_user_is_malformed(tokens, clock):
    iat = int(clock.now.timestamp())
    token = jwt.encode({"iat": iat, "exp": iat + 60}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError) as exc:
        tokens.verify(token)
    assert exc.value.context == {"reason": "malformed"}


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenService("")


@pytest.mark.parametrize("offset_days", [-3650, -1, 1, 3650])
def test_expiry_follows_injected_clock_not_wall_time(offset_days):
    shifted = FixedClock(utc_now() + timedelta(days=offset_days))
    service = TokenService(TEST_SECRET, clock=shifted)
    token = service.issue(9, LIFETIME)

    assert service.verify(token).user_id == 9
    shifted.advance(LIFETIME)
    with pytest.raises(InvalidTokenError):
        service.verify(token)
