"""
Demo authentication against the in-memory member directory.

Any demo account signs in with `DEMO_PASSWORD` (or the password it was
given through `update_password`). Tokens are opaque `demo:<id>` strings.
"""

from notas_ui.data.demo_members import DEMO_PASSWORD
from notas_ui.lib import logs
from notas_ui.models.member import MemberRecord
from notas_ui.services.auth_service import AuthService, AuthSession
from notas_ui.services.errors import AuthError
from notas_ui.services.member_service_demo import DemoMemberService

LOG = logs.logger(__file__)

_PREFIX = "demo:"


class DemoAuthService(AuthService):
    def __init__(self, members: DemoMemberService) -> None:
        self._members = members
        self._passwords: dict[str, str] = {}
        self.recovery_emails: list[tuple[str, str]] = []

    async def sign_in(self, email: str, password: str) -> AuthSession:
        member = self._members.find_by_email((email or "").strip())
        if member is None or password != self._passwords.get(member.id, DEMO_PASSWORD):
            raise AuthError("Email ou senha inválidos")
        return self._session(member)

    async def refresh_session(self, refresh_token: str) -> AuthSession:
        member = await self._member_for(refresh_token)
        if member is None:
            raise AuthError(
                "Link de convite inválido ou expirado. Solicite um novo convite."
            )
        return self._session(member)

    async def get_user(self, access_token: str) -> MemberRecord | None:
        return await self._member_for(access_token)

    async def sign_out(self, access_token: str) -> None:
        LOG.info("Demo sign out")

    async def send_reset_password_email(self, email: str, redirect_url: str) -> None:
        self.recovery_emails.append((email, redirect_url))

    async def update_password(self, access_token: str, password: str) -> None:
        member = await self._member_for(access_token)
        if member is None:
            raise AuthError("Sessão expirada. Faça login novamente.")
        self._passwords[member.id] = password

    async def _member_for(self, token: str | None) -> MemberRecord | None:
        if not token or not token.startswith(_PREFIX):
            return None
        member_id = token[len(_PREFIX) :]
        members = await self._members.list_members()
        return next((m for m in members if m.id == member_id), None)

    @staticmethod
    def _session(member: MemberRecord) -> AuthSession:
        token = f"{_PREFIX}{member.id}"
        return AuthSession(access_token=token, refresh_token=token, user=member)
