"""
Password recovery and invite-completion flows.

Links sent by the auth service carry their tokens in the URL fragment
(`#access_token=...&refresh_token=...&type=recovery`). The recovery flow
uses the access token directly; the invite flow first exchanges the
refresh token for a fresh session.
"""

from dataclasses import dataclass
from urllib.parse import parse_qs

from notas_ui.lib import logs
from notas_ui.models.common import Feedback
from notas_ui.models.member import is_valid_email, validate_new_password
from notas_ui.services.auth_service import AuthService, AuthSession
from notas_ui.services.errors import AuthError

LOG = logs.logger(__file__)


@dataclass(frozen=True)
class LinkTokens:
    access_token: str = ""
    refresh_token: str = ""
    link_type: str = ""
    error: str = ""


def parse_link_fragment(fragment: str | None) -> LinkTokens:
    """Read tokens (or an error description) from a `#a=b&c=d` fragment."""
    values = parse_qs((fragment or "").lstrip("#"))

    def _get(key: str) -> str:
        return values.get(key, [""])[0]

    return LinkTokens(
        access_token=_get("access_token"),
        refresh_token=_get("refresh_token"),
        link_type=_get("type"),
        error=_get("error_description"),
    )


@dataclass(frozen=True)
class PasswordResult:
    feedback: Feedback
    session: AuthSession | None = None


class PasswordController:
    def __init__(self, auth: AuthService, origin: str) -> None:
        self.auth = auth
        self.origin = origin

    async def send_reset_email(self, email: str) -> Feedback:
        email = (email or "").strip()
        if not email:
            return Feedback.error("Email é obrigatório")
        if not is_valid_email(email):
            return Feedback.error("Email deve ter um formato válido")
        try:
            await self.auth.send_reset_password_email(
                email, f"{self.origin}/reset-password"
            )
        except AuthError as exc:
            return Feedback.error(exc.message)
        return Feedback.success(
            "Email enviado! Verifique sua caixa de entrada para redefinir a senha."
        )

    async def reset_password(
        self, tokens: LinkTokens, password: str, confirmation: str
    ) -> PasswordResult:
        """Finish a recovery link: set the password with the link's access token."""
        error = validate_new_password(password, confirmation)
        if error:
            return PasswordResult(Feedback.error(error))
        if not tokens.access_token:
            return PasswordResult(
                Feedback.error("Link de redefinição inválido ou expirado.")
            )
        try:
            await self.auth.update_password(tokens.access_token, password)
        except AuthError as exc:
            return PasswordResult(Feedback.error(exc.message))
        session = AuthSession(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            user=await self._user(tokens.access_token),
        )
        return PasswordResult(
            Feedback.success("Senha redefinida com sucesso!"),
            session if session.user else None,
        )

    async def set_password(
        self, tokens: LinkTokens, password: str, confirmation: str
    ) -> PasswordResult:
        """Finish an invite link: refresh the session, then set the password."""
        error = validate_new_password(password, confirmation)
        if error:
            return PasswordResult(Feedback.error(error))
        if not tokens.refresh_token:
            return PasswordResult(Feedback.error("Token de atualização não encontrado"))
        try:
            session = await self.auth.refresh_session(tokens.refresh_token)
            await self.auth.update_password(session.access_token, password)
        except AuthError as exc:
            return PasswordResult(Feedback.error(exc.message))
        LOG.info("Password set for invited user %s", session.user.email)
        return PasswordResult(Feedback.success("Senha definida com sucesso!"), session)

    async def _user(self, access_token: str):
        try:
            return await self.auth.get_user(access_token)
        except AuthError:
            return None
