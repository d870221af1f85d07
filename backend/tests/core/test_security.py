from datetime import timedelta

import jwt
import pytest

from coachbook.core.config import settings
from coachbook.core.exceptions import UnauthorizedException
from coachbook.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    is_password_hash,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = get_password_hash("Secret123")

    assert hashed != "Secret123"
    assert is_password_hash(hashed)
    assert verify_password("Secret123", hashed)
    assert not verify_password("secret123", hashed)


def test_malformed_hash_does_not_raise():
    assert not is_password_hash("plain-text")
    assert verify_password("Secret123", "not-a-hash") is False


def test_token_carries_subject():
    token = create_access_token({"sub": "01HZX3J5K8M9N2P4Q6R7S8T9VW", "role": "expert"})

    payload = decode_access_token(token)

    assert payload["sub"] == "01HZX3J5K8M9N2P4Q6R7S8T9VW"
    assert payload["role"] == "expert"
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "someone1234"}, expires_delta=timedelta(seconds=-1))

    with pytest.raises(UnauthorizedException) as exc_info:
        decode_access_token(token)
    assert exc_info.value.code == "INVALID_TOKEN"


def test_foreign_signature_is_rejected():
    token = jwt.encode({"sub": "someone1234"}, "another-key", algorithm=settings.jwt_algorithm)

    with pytest.raises(UnauthorizedException):
        decode_access_token(token)


def test_token_without_subject_is_rejected():
    token = create_access_token({"role": "candidate"})

    with pytest.raises(UnauthorizedException):
        decode_access_token(token)
