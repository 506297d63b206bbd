import asyncio
import time

import httpx
import pytest
from jose import jwt

from app.core.auth.service import IdentityProviderUnavailable, IdentityVerifier, TokenVerificationError


SECRET = "test-secret"


def make_token(claims, key=SECRET, headers=None):
    payload = {"sub": "uid-1", "exp": int(time.time()) + 300}
    payload.update(claims)
    return jwt.encode(payload, key, algorithm="HS256", headers=headers)


def verify(verifier, token):
    return asyncio.run(verifier.verify(token))


def test_valid_token_gives_lowercased_email():
    verifier = IdentityVerifier(secret_key=SECRET, algorithms=["HS256"])

    identity = verify(verifier, make_token({"email": "Sender@Example.com", "name": "Sender"}))

    assert identity.email == "sender@example.com"
    assert identity.uid == "uid-1"
    assert identity.name == "Sender"


def test_wrong_signature_is_rejected():
    verifier = IdentityVerifier(secret_key=SECRET, algorithms=["HS256"])
    with pytest.raises(TokenVerificationError):
        verify(verifier, make_token({"email": "sender@example.com"}, key="other-secret"))


def test_expired_token_is_rejected():
    verifier = IdentityVerifier(secret_key=SECRET, algorithms=["HS256"])
    token = make_token({"email": "sender@example.com", "exp": int(time.time()) - 60})
    with pytest.raises(TokenVerificationError):
        verify(verifier, token)


def test_token_without_email_is_rejected():
    verifier = IdentityVerifier(secret_key=SECRET, algorithms=["HS256"])
    with pytest.raises(TokenVerificationError):
        verify(verifier, make_token({}))


def test_audience_is_checked_when_configured():
    verifier = IdentityVerifier(secret_key=SECRET, algorithms=["HS256"], audience="parcel-app")

    assert verify(verifier, make_token({"email": "a@example.com", "aud": "parcel-app"})).email == "a@example.com"
    with pytest.raises(TokenVerificationError):
        verify(verifier, make_token({"email": "a@example.com", "aud": "another-app"}))


def test_no_key_configured():
    with pytest.raises(IdentityProviderUnavailable):
        verify(IdentityVerifier(), make_token({"email": "a@example.com"}))


def test_jwks_is_downloaded_once():
    jwk = {"kty": "oct", "kid": "key-1", "k": "dGVzdC1zZWNyZXQ", "alg": "HS256"}
    calls = []

    def handler(request):
        calls.append(str(request.url))
        return httpx.Response(200, json={"keys": [jwk]})

    verifier = IdentityVerifier(
        jwks_url="https://idp.example.com/jwks.json",
        algorithms=["HS256"],
        transport=httpx.MockTransport(handler),
    )
    token = make_token({"email": "a@example.com"}, headers={"kid": "key-1"})

    assert verify(verifier, token).email == "a@example.com"
    assert verify(verifier, token).email == "a@example.com"
    assert calls == ["https://idp.example.com/jwks.json"]


def test_jwks_download_failure():
    verifier = IdentityVerifier(
        jwks_url="https://idp.example.com/jwks.json",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    with pytest.raises(IdentityProviderUnavailable):
        verify(verifier, make_token({"email": "a@example.com"}))
