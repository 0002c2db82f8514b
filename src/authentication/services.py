"""Identity token decoding (and issuing, for development and tests)."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed

from access_control.identity import ExternalIdentity


class TokenService:
    """Decode bearer identity tokens into ``ExternalIdentity`` claims.

    Tokens are minted by the identity provider; this service only verifies
    the signature and expiry with the configured key. ``issue_token`` exists
    so local tooling can produce tokens the decoder accepts.
    """

    ACCESS_TTL = timedelta(hours=1)

    @staticmethod
    def _key() -> str:
        return getattr(settings, "IDENTITY_TOKEN_KEY", None) or settings.SECRET_KEY

    @staticmethod
    def _algorithms() -> list[str]:
        return list(getattr(settings, "IDENTITY_TOKEN_ALGORITHMS", ["HS256"]))

    @staticmethod
    def _role_claim() -> str:
        return getattr(settings, "IDENTITY_ROLE_CLAIM", "custom:role")

    @classmethod
    def issue_token(
        cls,
        subject_id: str,
        email: str,
        role: str | None,
        email_verified: bool = True,
        ttl: timedelta | None = None,
    ) -> str:
        """Sign an identity token carrying the claims the decoder expects."""
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "sub": subject_id,
            "jti": str(uuid.uuid4()),
            "iat": int(now.timestamp()),
            "exp": int((now + (ttl or cls.ACCESS_TTL)).timestamp()),
            "email": email,
            "email_verified": email_verified,
            "token_use": "id",
        }
        if role is not None:
            payload[cls._role_claim()] = role
        audience = getattr(settings, "IDENTITY_TOKEN_AUDIENCE", None)
        if audience:
            payload["aud"] = audience
        return jwt.encode(payload, cls._key(), algorithm=cls._algorithms()[0])

    @classmethod
    def decode_token(cls, token: str) -> dict[str, Any]:
        """Decode and validate a JWT, mapping failures to ``AuthenticationFailed``."""
        audience = getattr(settings, "IDENTITY_TOKEN_AUDIENCE", None)
        try:
            payload = jwt.decode(
                token,
                cls._key(),
                algorithms=cls._algorithms(),
                audience=audience,
                options={"verify_aud": bool(audience)},
            )
        except jwt.ExpiredSignatureError as exc:  # pragma: no cover - simple mapping
            raise AuthenticationFailed("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationFailed("Invalid token") from exc

        if not payload.get("sub"):
            raise AuthenticationFailed("Token has no subject")
        return payload

    @classmethod
    def identity_from_token(cls, token: str) -> ExternalIdentity:
        return ExternalIdentity.from_claims(cls.decode_token(token), role_claim=cls._role_claim())


__all__ = ["TokenService"]
