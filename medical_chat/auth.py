"""
Session lookup for the relay host.

Sessions are established elsewhere; this module only checks that a request
carries one, either as a bearer token or as a session cookie.
"""

import hmac
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from .config import AuthConfig
from .errors import AuthError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    token: str


class SessionVerifier:
    """Accepts requests whose token is one of the configured session tokens."""

    def __init__(self, tokens: Iterable[str], cookie_name: str = "session_token"):
        self._tokens = [t for t in tokens if t]
        self.cookie_name = cookie_name
        self.bearer_scheme = HTTPBearer(auto_error=False)
        self.cookie_scheme = APIKeyCookie(name=cookie_name, auto_error=False)
        if not self._tokens:
            logger.warning("No session tokens configured; every chat request will be rejected")

    @classmethod
    def from_config(cls, config: AuthConfig) -> "SessionVerifier":
        return cls(config.session_tokens, config.cookie_name)

    def verify(self, token: Optional[str]) -> Optional[Session]:
        """Return the session for a token, or None when it is unknown."""
        if not token:
            return None
        for known in self._tokens:
            if hmac.compare_digest(token.encode(), known.encode()):
                return Session(token=token)
        return None

    def dependency(self):
        """FastAPI dependency resolving the request's session or raising AuthError."""

        async def require_session(
            credentials: Optional[HTTPAuthorizationCredentials] = Depends(self.bearer_scheme),
            cookie_token: Optional[str] = Depends(self.cookie_scheme),
        ) -> Session:
            token = credentials.credentials if credentials else cookie_token
            session = self.verify(token)
            if session is None:
                raise AuthError()
            return session

        return require_session
