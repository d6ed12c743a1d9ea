"""Per-request authentication gate: verify the access token and attach the caller's identity."""

import logging
from typing import Any

import jwt
from fastapi import Request

from app.core.config import Settings
from app.core.security import decode_access_token
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class AuthGuard:
    """
    Decides whether a request carries a valid access token.

    Tokens are tried in order: the auth cookie, then an
    `Authorization: Bearer <token>` header, so a stale cookie does not hide a
    valid header. On success the decoded identity is stored on
    `request.state.user`. The guard never raises; callers map a False result
    to 401.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def extract_tokens(self, request: Request) -> list[str]:
        tokens = []
        cookie = request.cookies.get(self.settings.AUTH_COOKIE_NAME)
        if cookie:
            tokens.append(cookie)
        header = request.headers.get("authorization", "")
        if header.lower().startswith(BEARER_PREFIX):
            bearer = header[len(BEARER_PREFIX):].strip()
            if bearer:
                tokens.append(bearer)
        return tokens

    def _identify(self, request: Request, token: str) -> CurrentUser | None:
        try:
            payload: dict[str, Any] = decode_access_token(self.settings, token)
        except jwt.PyJWTError as e:
            logger.info(
                "Access token rejected",
                extra={"path": request.url.path, "reason": type(e).__name__},
            )
            return None
        try:
            return CurrentUser(
                id=int(payload["sub"]),
                username=payload["username"],
                role=payload.get("role", "user"),
            )
        except (KeyError, TypeError, ValueError):
            logger.info("Access token has malformed claims", extra={"path": request.url.path})
            return None

    def can_activate(self, request: Request) -> bool:
        tokens = self.extract_tokens(request)
        if not tokens:
            logger.debug("No access token on request to %s", request.url.path)
            return False
        for token in tokens:
            user = self._identify(request, token)
            if user is not None:
                request.state.user = user
                return True
        return False
