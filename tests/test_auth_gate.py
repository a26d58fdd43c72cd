"""
Bearer-token gate on protected routes.
"""

from datetime import datetime, timedelta, timezone

import pytest

from api.auth import BAD_FORMAT, INVALID_TOKEN, NO_HEADER, get_token_service
from core.security import TokenService
from main import app
from tests.conftest import TEST_SECRET, bearer

PRODUCT = {"productName": "Lamp", "imageLink": None, "description": None, "price": 1.0}


class ExplodingTokenService(TokenService):
    def verify(self, token):
        raise AssertionError("token should not be verified")


def _add(client, headers=None):
    return client.post("/auth/addProduct", json=PRODUCT, headers=headers or {})


def test_missing_header(client):
    res = _add(client)
    assert res.status_code == 401
    assert res.json() == {"error": NO_HEADER}


def test_empty_header(client):
    res = _add(client, {"Authorization": ""})
    assert res.status_code == 401
    assert res.json() == {"error": NO_HEADER}


@pytest.mark.parametrize("header", ["Bearer", "Basic xyz", "bearer abc", "Bearer a b", "Token"])
def test_malformed_header_rejected_before_verification(client, header):
    app.dependency_overrides[get_token_service] = lambda: ExplodingTokenService(TEST_SECRET)

    res = _add(client, {"Authorization": header})
    assert res.status_code == 401
    assert res.json() == {"error": BAD_FORMAT}


def test_garbage_token(client):
    res = _add(client, bearer("not-a-jwt"))
    assert res.status_code == 401
    assert res.json() == {"error": INVALID_TOKEN}


def test_expired_token_rejected(client, register):
    register(client, "alice")
    issued = datetime.now(timezone.utc) - timedelta(hours=1, seconds=5)
    expired = TokenService(TEST_SECRET, clock=lambda: issued).issue(1)

    res = _add(client, bearer(expired))
    assert res.status_code == 401
    assert res.json() == {"error": INVALID_TOKEN}


def test_token_signed_with_other_secret(client, register):
    register(client, "alice")
    forged = TokenService("someone-elses-secret").issue(1)

    res = _add(client, bearer(forged))
    assert res.status_code == 401
    assert res.json() == {"error": INVALID_TOKEN}


def test_missing_secret_rejects_every_token(client, register):
    headers = register(client, "alice")
    app.dependency_overrides[get_token_service] = lambda: TokenService(None)

    res = _add(client, headers)
    assert res.status_code == 401
    assert res.json() == {"error": INVALID_TOKEN}


def test_valid_token_passes(client, register):
    headers = register(client, "alice")
    assert _add(client, headers).status_code == 201


def test_token_for_unknown_user(client, token_service):
    res = _add(client, bearer(token_service.issue(999)))
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}
