"""PyJWT-backed token adapter."""

from __future__ import annotations

from .jwt_token_issuer import JWTTokenIssuer

__all__ = ["JWTTokenIssuer"]
