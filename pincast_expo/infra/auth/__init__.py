"""Authentication infrastructure package."""

from .app_tokens import AppTokenClaims, AppTokenIssuer
from .identity import IdentityTokenVerifier, JWKSCache

__all__ = ["AppTokenClaims", "AppTokenIssuer", "IdentityTokenVerifier", "JWKSCache"]
