"""
GoTrue-backed authentication over httpx.

Public endpoints under `{auth_url}/auth/v1`, authenticated with the anon
key:

- POST /token?grant_type=password        sign in
- POST /token?grant_type=refresh_token   refresh (invite links)
- GET  /user                             current user
- PUT  /user                             update password
- POST /logout                           sign out
- POST /recover                          recovery e-mail
"""

from typing import Any

import httpx

from notas_ui.config import Settings
from notas_ui.lib import logs
from notas_ui.models.member import MemberRecord, parse_member
from notas_ui.services.auth_service import AuthService, AuthSession
from notas_ui.services.errors import AuthError

LOG = logs.logger(__file__)


class GoTrueAuthService(AuthService):
    """
    Client for the hosted auth service's public API.

    Attributes:
        settings: Auth URL, anon key and timeout.
    """

    def __init__(
        self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._base_url = f"{settings.auth_url}/auth/v1"

    async def sign_in(self, email: str, password: str) -> AuthSession:
        payload = await self._call(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            error_message="Email ou senha inválidos",
        )
        return self._session(payload, "Email ou senha inválidos")

    async def refresh_session(self, refresh_token: str) -> AuthSession:
        message = "Link de convite inválido ou expirado. Solicite um novo convite."
        payload = await self._call(
            "POST",
            "/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
            error_message=message,
        )
        return self._session(payload, message)

    async def get_user(self, access_token: str) -> MemberRecord | None:
        try:
            payload = await self._call(
                "GET",
                "/user",
                token=access_token,
                error_message="Sessão expirada. Faça login novamente.",
            )
        except AuthError as exc:
            if exc.status_code in (401, 403):
                return None
            raise
        return parse_member(payload) if isinstance(payload, dict) else None

    async def sign_out(self, access_token: str) -> None:
        await self._call(
            "POST",
            "/logout",
            token=access_token,
            error_message="Erro ao sair. Tente novamente.",
        )

    async def send_reset_password_email(self, email: str, redirect_url: str) -> None:
        await self._call(
            "POST",
            "/recover",
            params={"redirect_to": redirect_url},
            json={"email": email},
            error_message="Erro ao enviar email de recuperação. Tente novamente.",
        )
        LOG.info("send_reset_password_email - email:%s", email)

    async def update_password(self, access_token: str, password: str) -> None:
        await self._call(
            "PUT",
            "/user",
            token=access_token,
            json={"password": password},
            error_message="Ocorreu um erro ao definir sua senha. Tente novamente.",
        )

    @staticmethod
    def _session(payload: Any, error_message: str) -> AuthSession:
        if not isinstance(payload, dict) or not payload.get("access_token"):
            raise AuthError(error_message)
        user = parse_member(payload.get("user") or {})
        if user is None:
            raise AuthError(error_message)
        return AuthSession(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token") or "",
            user=user,
        )

    async def _call(
        self,
        method: str,
        path: str,
        error_message: str,
        token: str | None = None,
        **kwargs: Any,
    ) -> Any:
        headers = {
            "apikey": self.settings.auth_anon_key,
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token or self.settings.auth_anon_key}",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.http_timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method, f"{self._base_url}{path}", headers=headers, **kwargs
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            LOG.warning(
                "%s %s failed - status:%s", method, path, exc.response.status_code
            )
            raise AuthError(error_message, status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            LOG.error("%s %s failed - %s", method, path, exc)
            raise AuthError(error_message) from exc
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None
