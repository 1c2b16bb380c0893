import pytest

from conference_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    public_user,
    verify_password,
)

from .helpers import SECRET_KEY


def test_hash_password_uses_random_salt():
    first = hash_password("correct horse")
    second = hash_password("correct horse")
    assert first != second
    assert "correct horse" not in first
    assert verify_password("correct horse", first)
    assert verify_password("correct horse", second)


def test_verify_password_rejects_wrong_password():
    hashed = hash_password("correct horse")
    assert not verify_password("battery staple", hashed)


@pytest.mark.parametrize("stored", ["", "not-a-hash", "zz$zz", None])
def test_verify_password_rejects_malformed_hash(stored):
    assert verify_password("anything", stored) is False


def test_token_round_trip():
    token = create_access_token({"sub": "abc123", "email": "admin@example.org"}, secret_key=SECRET_KEY, expires_delta=60)
    payload = decode_access_token(token, SECRET_KEY)
    assert payload["sub"] == "abc123"
    assert payload["email"] == "admin@example.org"
    assert "exp" in payload


def test_token_signed_with_other_key_is_rejected():
    token = create_access_token({"sub": "abc123"}, secret_key="another-key", expires_delta=60)
    assert decode_access_token(token, SECRET_KEY) is None


def test_tampered_payload_is_rejected():
    token = create_access_token({"sub": "abc123"}, secret_key=SECRET_KEY, expires_delta=60)
    header, _, signature = token.split(".")
    forged = create_access_token({"sub": "someone-else"}, secret_key="guess", expires_delta=60).split(".")[1]
    assert decode_access_token(f"{header}.{forged}.{signature}", SECRET_KEY) is None


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "abc123"}, secret_key=SECRET_KEY, expires_delta=-10)
    assert decode_access_token(token, SECRET_KEY) is None


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "!!!.@@@.###", "eyJhbGciOiJIUzI1NiJ9.e30.sig"])
def test_malformed_tokens_are_rejected(token):
    assert decode_access_token(token, SECRET_KEY) is None


def test_public_user_strips_password_hash():
    user = {"id": "1", "email": "admin@example.org", "passwordHash": "salt$hash", "role": "admin"}
    assert public_user(user) == {"id": "1", "email": "admin@example.org", "role": "admin"}
    assert "passwordHash" in user
