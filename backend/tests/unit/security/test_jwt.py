"""Unit tests for security/jwt.py"""

import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt

from notesapp.security import jwt as jwt_module
from notesapp.security.jwt import (
    blacklist_token,
    create_access_token,
    decode_access_token,
    get_user_id_from_token,
)


class DummySettings:
    secret_key = "test-secret"
    algorithm = "HS256"
    access_token_expire_minutes = 30


async def test_create_and_decode_access_token(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())

    sub = str(uuid.uuid4())
    token = create_access_token({"sub": sub}, expires_delta=timedelta(minutes=5))
    assert isinstance(token, str)

    payload = await decode_access_token(token)
    assert payload is not None
    assert payload["sub"] == sub
    assert payload["type"] == "access"
    assert payload["jti"]


async def test_default_expiry_uses_settings(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())

    token = create_access_token({"sub": "x"})
    claims = jwt.get_unverified_claims(token)
    remaining = claims["exp"] - datetime.now(timezone.utc).timestamp()
    assert 29 * 60 < remaining <= 30 * 60


async def test_each_token_has_its_own_jti():
    a = jwt.get_unverified_claims(create_access_token({"sub": "x"}))
    b = jwt.get_unverified_claims(create_access_token({"sub": "x"}))
    assert a["jti"] != b["jti"]


async def test_decode_rejects_invalid_signature(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())

    forged = jwt.encode({"sub": "x", "type": "access"}, "other-secret", algorithm="HS256")
    assert await decode_access_token(forged) is None


async def test_decode_rejects_expired_token():
    token = create_access_token({"sub": "x"}, expires_delta=timedelta(seconds=-1))
    assert await decode_access_token(token) is None


async def test_decode_rejects_wrong_type(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())

    token = jwt.encode(
        {"sub": "x", "type": "refresh", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        DummySettings.secret_key,
        algorithm="HS256",
    )
    assert await decode_access_token(token) is None


async def test_decode_rejects_garbage():
    assert await decode_access_token("not-a-jwt") is None


async def test_revoked_token_is_rejected(fake_redis):
    token = create_access_token({"sub": str(uuid.uuid4())})
    assert await blacklist_token(token) is True
    assert await decode_access_token(token) is None


async def test_redis_outage_does_not_revoke(fake_redis):
    token = create_access_token({"sub": str(uuid.uuid4())})
    fake_redis.available = False
    assert await decode_access_token(token) is not None


async def test_blacklist_stores_remaining_lifetime(fake_redis):
    token = create_access_token({"sub": "x"}, expires_delta=timedelta(minutes=10))
    jti = jwt.get_unverified_claims(token)["jti"]

    assert await blacklist_token(token) is True
    assert 0 < fake_redis.blacklist[jti] <= 600


async def test_blacklist_ignores_invalid_tokens(fake_redis):
    assert await blacklist_token("garbage") is False
    assert fake_redis.blacklist == {}


async def test_get_user_id_from_token():
    uid = uuid.uuid4()
    assert await get_user_id_from_token(create_access_token({"sub": str(uid)})) == uid


async def test_get_user_id_from_token_bad_subject():
    assert await get_user_id_from_token(create_access_token({"sub": "not-a-uuid"})) is None
    assert await get_user_id_from_token(create_access_token({})) is None
