import logging
import time
from typing import Any, Dict, List, Optional

import httpx
from jose import jwt, JWTError

from app.config.settings import settings
from app.core.auth.schemas import VerifiedIdentity

logger = logging.getLogger(__name__)


class TokenVerificationError(Exception):
    """The identity provider's signature or claims did not check out"""


class IdentityProviderUnavailable(Exception):
    """Verification keys could not be obtained"""


class IdentityVerifier:
    """
    Verifies bearer ID tokens issued by the external identity provider.

    Tokens are checked against the provider's published JWKS when
    `jwks_url` is configured, otherwise against a shared secret. Signature,
    expiry, audience and issuer checks are delegated to python-jose.
    """

    def __init__(
        self,
        jwks_url: Optional[str] = None,
        secret_key: Optional[str] = None,
        algorithms: Optional[List[str]] = None,
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        jwks_ttl_seconds: int = 3600,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.jwks_url = jwks_url
        self.secret_key = secret_key
        self.algorithms = algorithms or ["RS256"]
        self.audience = audience
        self.issuer = issuer
        self.jwks_ttl_seconds = jwks_ttl_seconds
        self.transport = transport
        self._jwks: Optional[Dict[str, Any]] = None
        self._jwks_fetched_at = 0.0

    async def _get_jwks(self) -> Dict[str, Any]:
        """Download the provider keys, reusing them until the TTL expires"""
        if self._jwks is not None and time.monotonic() - self._jwks_fetched_at < self.jwks_ttl_seconds:
            return self._jwks

        try:
            async with httpx.AsyncClient(timeout=10, transport=self.transport) as client:
                response = await client.get(self.jwks_url)
                response.raise_for_status()
                self._jwks = response.json()
                self._jwks_fetched_at = time.monotonic()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Could not download identity provider keys: {e}")
            raise IdentityProviderUnavailable(str(e)) from e

        return self._jwks

    async def _get_key(self) -> Any:
        if self.jwks_url:
            return await self._get_jwks()
        if self.secret_key:
            return self.secret_key
        raise IdentityProviderUnavailable("No identity provider key configured")

    async def verify(self, token: str) -> VerifiedIdentity:
        """Verify a token and return the caller's identity"""
        key = await self._get_key()

        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            logger.info(f"Rejected identity token: {e}")
            raise TokenVerificationError(str(e)) from e

        email = payload.get("email")
        if not email:
            raise TokenVerificationError("Token has no email claim")

        return VerifiedIdentity(
            email=str(email).lower(),
            uid=payload.get("sub") or payload.get("user_id"),
            name=payload.get("name"),
            claims=payload,
        )


def build_identity_verifier() -> IdentityVerifier:
    return IdentityVerifier(
        jwks_url=settings.identity_jwks_url,
        secret_key=settings.identity_secret_key,
        algorithms=settings.identity_algorithm_list,
        audience=settings.identity_audience,
        issuer=settings.identity_issuer,
        jwks_ttl_seconds=settings.identity_jwks_ttl_seconds,
    )
