"""
Demo implementation of MemberService using an in-memory directory.

Changes (invites, edits, deletions) live for the lifetime of the process.
Sent e-mails are recorded in `sent_emails` instead of being delivered.
"""

import uuid
from datetime import datetime, timezone

from notas_ui.data.demo_members import DEMO_USERS_PAYLOAD
from notas_ui.lib import logs
from notas_ui.models.member import (
    MemberRecord,
    MemberRole,
    parse_members,
    validate_member_update,
    validate_new_member,
)
from notas_ui.services.errors import MemberServiceError
from notas_ui.services.member_service import MemberService, ResendAction

LOG = logs.logger(__file__)


class DemoMemberService(MemberService):
    """
    In-memory user directory seeded with demo accounts.

    Attributes:
        sent_emails: (action, email, redirect URL) for every e-mail "sent".
    """

    def __init__(self, members: list[MemberRecord] | None = None) -> None:
        self._members: list[MemberRecord] = (
            list(members) if members is not None else parse_members(DEMO_USERS_PAYLOAD)
        )
        self.sent_emails: list[tuple[ResendAction, str, str]] = []

    async def list_members(self) -> list[MemberRecord]:
        return list(self._members)

    async def get_member(self, member_id: str) -> MemberRecord:
        for member in self._members:
            if member.id == member_id:
                return member
        raise MemberServiceError("Usuário não encontrado")

    def find_by_email(self, email: str) -> MemberRecord | None:
        return next((m for m in self._members if m.email == email), None)

    async def add_member(
        self, name: str, email: str, role: MemberRole | str, origin: str
    ) -> MemberRecord:
        error = validate_new_member(name, email)
        if error:
            raise MemberServiceError(error)
        email = email.strip()
        if self.find_by_email(email) is not None:
            raise MemberServiceError("Este email já está cadastrado")
        member = MemberRecord(
            id=str(uuid.uuid4()),
            email=email,
            display_name=name.strip(),
            role=MemberRole.normalize(
                role.value if isinstance(role, MemberRole) else role
            ),
            created_at=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        )
        self._members.append(member)
        self.sent_emails.append((ResendAction.INVITE, email, f"{origin}/set-password"))
        LOG.info("Demo invite - email:%s", email)
        return member

    async def update_member(
        self,
        member_id: str,
        display_name: str,
        role: MemberRole | str | None = None,
    ) -> None:
        error = validate_member_update(display_name)
        if error:
            raise MemberServiceError(error)
        member = await self.get_member(member_id)
        member.display_name = display_name.strip()
        if role:
            member.role = MemberRole.normalize(
                role.value if isinstance(role, MemberRole) else role
            )

    async def remove_member(self, member_id: str) -> None:
        member = await self.get_member(member_id)
        self._members.remove(member)

    async def resend_invite_or_reset_password(
        self, email: str, origin: str
    ) -> ResendAction:
        if not email:
            raise MemberServiceError("Email é obrigatório")
        member = self.find_by_email(email)
        if member is None:
            raise MemberServiceError("Usuário não encontrado")
        if member.email_confirmed_at:
            self.sent_emails.append(
                (ResendAction.RECOVERY, email, f"{origin}/reset-password")
            )
            return ResendAction.RECOVERY
        self.sent_emails.append((ResendAction.INVITE, email, f"{origin}/set-password"))
        return ResendAction.INVITE
