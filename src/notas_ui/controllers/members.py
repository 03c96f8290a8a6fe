"""
Controller for the team members section of the settings page.

Admin-only actions are rejected before any call to the member directory,
and so are form validation failures. Successful actions reload the list.
"""

from notas_ui.controllers import permissions
from notas_ui.controllers.base import ListController
from notas_ui.lib import logs
from notas_ui.models.common import Feedback
from notas_ui.models.member import (
    MemberRecord,
    MemberRole,
    validate_member_update,
    validate_new_member,
)
from notas_ui.services.errors import ServiceError
from notas_ui.services.member_service import MemberService, ResendAction
from notas_ui.utils.list_processor import MEMBER_LIST_CONFIG

LOG = logs.logger(__file__)


class MembersController(ListController[MemberRecord]):
    """
    Members listing and administration for one session.

    Attributes:
        current_user: The signed-in user; admin rights come from its role.
        origin: Public origin used for invite and recovery redirects.
        busy: True while a member action is in flight.
    """

    def __init__(
        self,
        service: MemberService,
        current_user: MemberRecord | None,
        origin: str,
        page_size: int = 7,
        debounce_delay: float = 0.3,
    ) -> None:
        super().__init__(MEMBER_LIST_CONFIG, page_size, debounce_delay)
        self.service = service
        self.current_user = current_user
        self.origin = origin
        self.busy = False

    async def _fetch(self, token: str | None) -> list[MemberRecord]:
        return await self.service.list_members()

    @property
    def is_admin(self) -> bool:
        return permissions.is_admin(self.current_user)

    @property
    def empty_message(self) -> str:
        term = self.query.search_term.strip()
        if term:
            return f'Nenhum membro encontrado para "{term}"'
        return "Nenhum membro cadastrado"

    def find(self, member_id: str) -> MemberRecord | None:
        return next((m for m in self._records if m.id == member_id), None)

    async def add_member(
        self, name: str, email: str, role: MemberRole | str = MemberRole.USER
    ) -> Feedback:
        denied = permissions.require_admin(self.current_user, permissions.ADD_DENIED)
        if denied:
            return denied
        error = validate_new_member(name, email)
        if error:
            return Feedback.error(error)
        return await self._run(
            self.service.add_member(name, email.strip(), role, self.origin),
            f"Convite enviado com sucesso para {email.strip()}",
        )

    async def update_member(
        self,
        member_id: str,
        display_name: str,
        role: MemberRole | str | None = None,
    ) -> Feedback:
        denied = permissions.require_admin(self.current_user, permissions.EDIT_DENIED)
        if denied:
            return denied
        error = validate_member_update(display_name)
        if error:
            return Feedback.error(error)
        feedback = await self._run(
            self.service.update_member(member_id, display_name, role),
            "Usuário atualizado com sucesso!",
        )
        if feedback.ok and self.current_user and member_id == self.current_user.id:
            self.current_user.display_name = display_name.strip()
            if role:
                self.current_user.role = MemberRole.normalize(
                    role.value if isinstance(role, MemberRole) else role
                )
        return feedback

    async def update_profile(self, display_name: str) -> Feedback:
        """Rename the signed-in user; the role is never touched."""
        if self.current_user is None:
            return Feedback.error(permissions.EDIT_DENIED)
        error = validate_member_update(display_name)
        if error:
            return Feedback.error(error)
        feedback = await self._run(
            self.service.update_member(self.current_user.id, display_name),
            "Perfil atualizado com sucesso!",
        )
        if feedback.ok:
            self.current_user.display_name = display_name.strip()
        return feedback

    async def remove_member(self, member_id: str) -> Feedback:
        denied = permissions.require_admin(self.current_user, permissions.REMOVE_DENIED)
        if denied:
            return denied
        if not member_id:
            return Feedback.error("ID do usuário é obrigatório")
        return await self._run(
            self.service.remove_member(member_id), "Membro removido com sucesso!"
        )

    async def resend_invite_or_reset_password(self, email: str) -> Feedback:
        denied = permissions.require_admin_or_self(
            self.current_user, permissions.ACTION_DENIED, email=email
        )
        if denied:
            return denied
        if not email:
            return Feedback.error("Email é obrigatório")
        self.busy = True
        try:
            action = await self.service.resend_invite_or_reset_password(
                email, self.origin
            )
        except ServiceError as exc:
            LOG.error("Resend failed for %s: %s", email, exc.message)
            return Feedback.error(exc.message)
        finally:
            self.busy = False
        await self.load()
        if action is ResendAction.RECOVERY:
            return Feedback.success("Email para redefinição de senha enviado com sucesso!")
        return Feedback.success("Convite reenviado com sucesso!")

    async def _run(self, call, success_message: str) -> Feedback:
        self.busy = True
        try:
            await call
        except ServiceError as exc:
            LOG.error("Member action failed: %s", exc.message)
            return Feedback.error(exc.message)
        finally:
            self.busy = False
        await self.load()
        return Feedback.success(success_message)
