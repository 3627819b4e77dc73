"""
Session resolution.

Sign-in is handled by an external identity provider. The API only needs the
bearer credential and verified username of the caller, which a
SessionProvider extracts from the request.
"""

from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Request
from pydantic import BaseModel


class Session(BaseModel):
    """Signed-in caller as delivered by the identity provider."""

    access_token: Optional[str] = None
    username: Optional[str] = None


class SessionProvider(ABC):
    """Resolves the caller's session from a request."""

    @abstractmethod
    async def get_session(self, request: Request) -> Optional[Session]:
        pass


class HeaderSessionProvider(SessionProvider):
    """
    Reads the session forwarded by the identity provider's proxy.

    ``Authorization: Bearer <token>`` carries the credential and
    ``X-GitHub-Username`` the verified login.
    """

    username_header = "X-GitHub-Username"

    async def get_session(self, request: Request) -> Optional[Session]:
        authorization = request.headers.get("Authorization", "")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        username = request.headers.get(self.username_header, "").strip() or None
        return Session(access_token=token.strip(), username=username)


async def current_session(request: Request) -> Optional[Session]:
    """FastAPI dependency returning the caller's session, if any."""
    provider: SessionProvider = request.app.state.session_provider
    return await provider.get_session(request)
