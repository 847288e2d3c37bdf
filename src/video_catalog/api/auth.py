"""Bearer token authentication.

Protected endpoints depend on get_current_principal(), which resolves the
Authorization header into a Principal or fails with 401 before any
catalog code runs. Tokens are HS256 JWTs whose "sub" claim is the
principal id.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Header, HTTPException, Request

from video_catalog.models.domain import Principal

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(days=1)


class AuthenticationError(Exception):
    """Token missing, expired or invalid."""


class TokenVerifier:
    """Issues and verifies principal tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    def issue(self, principal_id: str, expires_in: timedelta = DEFAULT_TOKEN_TTL) -> str:
        """Mint a token for principal_id."""
        now = datetime.now(timezone.utc)
        claims = {"sub": str(principal_id), "iat": now, "exp": now + expires_in}
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Principal:
        """Verify token and return its principal.

        Raises:
            AuthenticationError: If the token is expired, malformed, signed
                with another key or lacks a subject.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token expired") from e
        except jwt.PyJWTError as e:
            raise AuthenticationError("Token is not valid") from e

        subject = claims.get("sub")
        if not subject:
            raise AuthenticationError("Token is not valid")
        return Principal(principal_id=str(subject))


def get_token_verifier(request: Request) -> TokenVerifier:
    """Dependency returning the app's TokenVerifier."""
    return request.app.state.token_verifier


async def get_current_principal(
    request: Request,
    authorization: str | None = Header(default=None),
) -> Principal:
    """Resolve the request's bearer token into a Principal.

    Raises:
        HTTPException: 401 if the header is missing, not a bearer token,
            or the token fails verification.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authorized, no token")

    token = authorization[len("Bearer ") :].strip()
    try:
        return get_token_verifier(request).verify(token)
    except AuthenticationError as e:
        logger.info(f"Rejected token for {request.method} {request.url.path}: {e}")
        raise HTTPException(status_code=401, detail="Not authorized, token failed") from e
