"""Verification of access tokens issued by the hosted auth provider.

The provider signs its access tokens as JWTs with a shared project secret; the
subject claim is the user's UUID. This module only checks those tokens. It
never stores credentials and never talks to the provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from safe_space.core.errors import Unauthenticated
from safe_space.core.identifiers import is_uuid
from safe_space.core.settings import Settings

__all__ = ["Identity", "IdentityVerifier"]


@dataclass(frozen=True)
class Identity:
    """A verified caller."""

    id: str
    email: str | None = None


class IdentityVerifier:
    """Resolve bearer tokens or session cookies to an `Identity`."""

    def __init__(self, settings: Settings) -> None:
        self.secret = settings.auth_jwt_secret
        self.algorithm = settings.auth_jwt_algorithm
        self.audience = settings.auth_jwt_audience
        self.token_ttl = timedelta(seconds=settings.auth_token_ttl_seconds)

    def resolve(self, bearer_token: str | None, session_token: str | None = None) -> Identity:
        """Return the identity for whichever credential is present.

        The bearer token takes precedence over the session cookie.

        Raises:
            Unauthenticated: If no credential is present or it does not verify.
        """
        token = bearer_token or session_token
        if not token:
            raise Unauthenticated("Authentication required")
        return self.verify_token(token)

    def verify_token(self, token: str) -> Identity:
        """Decode and validate a single access token.

        Raises:
            Unauthenticated: If the signature, expiry or audience is wrong, or
                the subject is not a user UUID.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
            )
        except JWTError as err:
            raise Unauthenticated("Invalid authentication token") from err

        subject = payload.get("sub")
        if not is_uuid(subject):
            raise Unauthenticated("Invalid authentication token")
        return Identity(id=subject.lower(), email=payload.get("email"))

    def issue_token(
        self,
        user_id: str,
        email: str | None = None,
        *,
        expires_in: timedelta | None = None,
    ) -> str:
        """Mint a provider-compatible access token.

        Used by local tooling and tests; production tokens come from the
        provider itself.
        """
        now = datetime.now(UTC)
        claims: dict[str, object] = {
            "sub": user_id,
            "aud": self.audience,
            "role": "authenticated",
            "iat": int(now.timestamp()),
            "exp": int((now + (expires_in or self.token_ttl)).timestamp()),
        }
        if email is not None:
            claims["email"] = email
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)
