"""
Abstract base class for authentication and password flows.

Implementations:
- DemoAuthService: Signs in the demo directory's accounts
- GoTrueAuthService: Public GoTrue REST API with the anon key

Two password flows exist. A forgotten password sends a recovery e-mail that
links to `/reset-password`; an invite links to `/set-password`. Both land
with tokens in the URL fragment and finish with `update_password`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from notas_ui.models.member import MemberRecord


@dataclass(slots=True)
class AuthSession:
    """Tokens and user returned by a successful sign-in or refresh."""

    access_token: str
    refresh_token: str
    user: MemberRecord


class AuthService(ABC):
    """All methods raise `AuthError` with a user-facing message on failure."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange e-mail and password for a session."""

    @abstractmethod
    async def refresh_session(self, refresh_token: str) -> AuthSession:
        """Exchange a refresh token (e.g. from an invite link) for a session."""

    @abstractmethod
    async def get_user(self, access_token: str) -> MemberRecord | None:
        """Return the user behind a token, or None when it is not valid."""

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Revoke the session."""

    @abstractmethod
    async def send_reset_password_email(self, email: str, redirect_url: str) -> None:
        """Send a recovery e-mail linking to `redirect_url`."""

    @abstractmethod
    async def update_password(self, access_token: str, password: str) -> None:
        """Set a new password for the signed-in user."""
