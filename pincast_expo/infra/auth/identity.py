"""
Identity provider token verification.

Tokens issued by the external identity provider are verified against its
published JWKS. The key set lives in an explicit ``JWKSCache`` object that
is refreshed once its TTL has elapsed, or immediately when a token names a
key id the cached set does not contain (key rotation). Without a JWKS URL
the verifier falls back to the shared HMAC secret, which is what local
development and the test suite use.
"""

from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
import jwt

from pincast_expo.application.ports import IdentityVerifierPort, TokenClaims
from pincast_expo.domain.clock import utcnow
from pincast_expo.domain.exceptions import UnauthenticatedError
from pincast_expo.infra.config.logging_config import get_logger
from pincast_expo.infra.config.settings import Settings

ASYMMETRIC_ALGORITHMS = ("RS256", "RS384", "RS512", "ES256", "ES384", "ES512")

JWKSFetcher = Callable[[], Awaitable[Dict[str, Any]]]


def http_jwks_fetcher(url: str, timeout: float = 5.0) -> JWKSFetcher:
    """Build a fetcher that downloads a JWKS document with httpx."""

    async def fetch() -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()

    return fetch


class JWKSCache:
    """Holds the identity provider key set: ``value``, ``fetched_at``, ``ttl``."""

    def __init__(
        self,
        fetch: JWKSFetcher,
        ttl: timedelta,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.value: Optional[jwt.PyJWKSet] = None
        self.fetched_at: Optional[datetime] = None
        self.ttl = ttl
        self._fetch = fetch
        self._clock = clock
        self._log = get_logger("auth.jwks")

    def is_stale(self, now: Optional[datetime] = None) -> bool:
        if self.value is None or self.fetched_at is None:
            return True
        now = now or self._clock()
        return now - self.fetched_at >= self.ttl

    async def refresh_if_stale(self) -> jwt.PyJWKSet:
        if self.is_stale():
            return await self.refresh()
        return self.value

    async def refresh(self) -> jwt.PyJWKSet:
        document = await self._fetch()
        self.value = jwt.PyJWKSet.from_dict(document)
        self.fetched_at = self._clock()
        self._log.info("jwks.refreshed", keys=len(self.value.keys))
        return self.value

    def invalidate(self) -> None:
        self.fetched_at = None


class IdentityTokenVerifier(IdentityVerifierPort):
    """Verifies identity tokens and returns the subject and scopes."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: str = "HS256",
        jwks_cache: Optional[JWKSCache] = None,
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
    ):
        if jwks_cache is None and not secret_key:
            raise ValueError("Either a JWKS cache or a secret key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.jwks_cache = jwks_cache
        self.issuer = issuer
        self.audience = audience
        self._log = get_logger("auth.identity")

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityTokenVerifier":
        jwks_cache = None
        if settings.identity_jwks_url:
            jwks_cache = JWKSCache(
                fetch=http_jwks_fetcher(
                    settings.identity_jwks_url, settings.jwks_fetch_timeout_seconds
                ),
                ttl=timedelta(seconds=settings.jwks_cache_ttl_seconds),
            )
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            jwks_cache=jwks_cache,
            issuer=settings.identity_issuer,
            audience=settings.identity_audience,
        )

    async def verify(self, token: str) -> TokenClaims:
        try:
            key, algorithms = await self._resolve_key(token)
            payload = jwt.decode(
                token,
                key,
                algorithms=algorithms,
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "require": ["exp", "sub"],
                    "verify_aud": self.audience is not None,
                },
            )
        except jwt.ExpiredSignatureError:
            self._log.info("identity.expired")
            raise UnauthenticatedError("Token has expired")
        except jwt.MissingRequiredClaimError as e:
            self._log.info("identity.missing_claim", claim=e.claim)
            raise UnauthenticatedError(f"Token missing required claim: {e.claim}")
        except jwt.InvalidTokenError as e:
            self._log.info("identity.invalid", error=str(e))
            raise UnauthenticatedError("Invalid token")
        except jwt.PyJWTError as e:
            # Malformed key set (PyJWKSetError) or unusable key
            self._log.error("identity.jwks_invalid", error=str(e))
            raise UnauthenticatedError("Invalid token")
        except httpx.HTTPError as e:
            self._log.error("identity.jwks_unavailable", error=str(e))
            raise UnauthenticatedError("Invalid token")

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise UnauthenticatedError("Invalid token: missing subject ID")

        return TokenClaims(subject_id=subject, scopes=_scopes(payload))

    async def _resolve_key(self, token: str):
        if self.jwks_cache is None:
            return self.secret_key, [self.algorithm]

        header = jwt.get_unverified_header(token)
        algorithm = header.get("alg")
        if algorithm not in ASYMMETRIC_ALGORITHMS:
            raise jwt.InvalidAlgorithmError(f"Unsupported algorithm: {algorithm}")

        kid = header.get("kid")
        key_set = await self.jwks_cache.refresh_if_stale()
        signing_key = _find_key(key_set, kid)
        if signing_key is None:
            # Unknown kid: the provider may have rotated keys since the last fetch.
            key_set = await self.jwks_cache.refresh()
            signing_key = _find_key(key_set, kid)
        if signing_key is None:
            raise jwt.InvalidSignatureError("Unknown signing key")
        return signing_key.key, [algorithm]


def _find_key(key_set: jwt.PyJWKSet, kid: Optional[str]) -> Optional[jwt.PyJWK]:
    if kid is None:
        return key_set.keys[0] if len(key_set.keys) == 1 else None
    for key in key_set.keys:
        if key.key_id == kid:
            return key
    return None


def _scopes(payload: Dict[str, Any]) -> List[str]:
    scope = payload.get("scope", payload.get("scopes"))
    if isinstance(scope, str):
        return scope.split()
    if isinstance(scope, (list, tuple)):
        return [str(item) for item in scope]
    return []
