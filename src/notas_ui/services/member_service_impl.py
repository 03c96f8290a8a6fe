"""
Member directory backed by the auth service's admin REST API.

Calls are authenticated with the service-role key and go to the GoTrue
endpoints under `{auth_url}/auth/v1`:

- GET    /admin/users             list (paged with `page`/`per_page`)
- GET    /admin/users/{id}        fetch one
- PUT    /admin/users/{id}        update `user_metadata`
- DELETE /admin/users/{id}        delete
- POST   /invite                  invite by e-mail
- POST   /admin/generate_link     recovery link for confirmed users
"""

from typing import Any

import httpx

from notas_ui.config import Settings
from notas_ui.lib import logs
from notas_ui.models.member import (
    MemberRecord,
    MemberRole,
    parse_member,
    parse_members,
    validate_member_update,
    validate_new_member,
)
from notas_ui.services.errors import MemberServiceError
from notas_ui.services.member_service import MemberService, ResendAction

LOG = logs.logger(__file__)

_PER_PAGE = 1000


class AuthDirectoryMemberService(MemberService):
    """
    Admin client for the hosted user directory.

    Attributes:
        settings: Auth URL, service key and timeout.
    """

    def __init__(
        self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._base_url = f"{settings.auth_url}/auth/v1"

    async def list_members(self) -> list[MemberRecord]:
        members: list[MemberRecord] = []
        page = 1
        while True:
            payload = await self._call(
                "GET",
                "/admin/users",
                params={"page": page, "per_page": _PER_PAGE},
                error_message="Erro ao buscar membros",
            )
            batch = parse_members(payload)
            members.extend(batch)
            if len(batch) < _PER_PAGE:
                break
            page += 1
        LOG.info("list_members - count:%s", len(members))
        return members

    async def get_member(self, member_id: str) -> MemberRecord:
        if not member_id:
            raise MemberServiceError("ID do usuário é obrigatório")
        payload = await self._call(
            "GET",
            f"/admin/users/{member_id}",
            error_message="Usuário não encontrado",
        )
        member = parse_member(payload) if isinstance(payload, dict) else None
        if member is None:
            raise MemberServiceError("Usuário não encontrado")
        return member

    async def add_member(
        self, name: str, email: str, role: MemberRole | str, origin: str
    ) -> MemberRecord:
        error = validate_new_member(name, email)
        if error:
            raise MemberServiceError(error)
        email = email.strip()
        if await self._find_by_email(email) is not None:
            raise MemberServiceError("Este email já está cadastrado")
        normalized = MemberRole.normalize(
            role.value if isinstance(role, MemberRole) else role
        )
        payload = await self._call(
            "POST",
            "/invite",
            params={"redirect_to": f"{origin}/set-password"},
            json={
                "email": email,
                "data": {
                    "display_name": name.strip(),
                    "role": normalized.value,
                    "email_verified": False,
                },
            },
            error_message="Erro ao adicionar membro",
        )
        LOG.info("add_member - email:%s role:%s", email, normalized.value)
        member = parse_member(payload) if isinstance(payload, dict) else None
        return member or MemberRecord(
            id="", email=email, display_name=name.strip(), role=normalized
        )

    async def update_member(
        self,
        member_id: str,
        display_name: str,
        role: MemberRole | str | None = None,
    ) -> None:
        error = validate_member_update(display_name)
        if error:
            raise MemberServiceError(error)
        existing = await self._call(
            "GET",
            f"/admin/users/{member_id}",
            error_message="Usuário não encontrado",
        )
        if not isinstance(existing, dict) or not existing.get("id"):
            raise MemberServiceError("Usuário não encontrado")
        metadata = dict(existing.get("user_metadata") or {})
        metadata["display_name"] = display_name.strip()
        if role:
            value = role.value if isinstance(role, MemberRole) else role
            metadata["role"] = MemberRole.normalize(value).value
        await self._call(
            "PUT",
            f"/admin/users/{member_id}",
            json={"user_metadata": metadata},
            error_message="Erro ao atualizar usuário",
        )
        LOG.info("update_member - id:%s", member_id)

    async def remove_member(self, member_id: str) -> None:
        if not member_id:
            raise MemberServiceError("ID do usuário é obrigatório")
        await self._call(
            "DELETE",
            f"/admin/users/{member_id}",
            error_message="Erro ao remover membro",
        )
        LOG.info("remove_member - id:%s", member_id)

    async def resend_invite_or_reset_password(
        self, email: str, origin: str
    ) -> ResendAction:
        if not email:
            raise MemberServiceError("Email é obrigatório")
        member = await self._find_by_email(email)
        if member is None:
            raise MemberServiceError("Usuário não encontrado")
        if member.email_confirmed_at:
            await self._call(
                "POST",
                "/admin/generate_link",
                json={
                    "type": "recovery",
                    "email": email,
                    "redirect_to": f"{origin}/reset-password",
                },
                error_message="Erro ao processar solicitação",
            )
            action = ResendAction.RECOVERY
        else:
            await self._call(
                "POST",
                "/invite",
                params={"redirect_to": f"{origin}/set-password"},
                json={"email": email},
                error_message="Erro ao processar solicitação",
            )
            action = ResendAction.INVITE
        LOG.info("resend_invite_or_reset_password - email:%s action:%s", email, action.value)
        return action

    async def _find_by_email(self, email: str) -> MemberRecord | None:
        for member in await self.list_members():
            if member.email == email:
                return member
        return None

    async def _call(
        self,
        method: str,
        path: str,
        error_message: str,
        **kwargs: Any,
    ) -> Any:
        key = self.settings.auth_service_key
        headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
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
            LOG.error(
                "%s %s failed - status:%s detail:%s",
                method,
                path,
                exc.response.status_code,
                _error_detail(exc.response),
            )
            raise MemberServiceError(
                error_message, status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            LOG.error("%s %s failed - %s", method, path, exc)
            raise MemberServiceError(error_message) from exc
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return str(
            body.get("msg") or body.get("error_description") or body.get("message") or body
        )
    return str(body)
