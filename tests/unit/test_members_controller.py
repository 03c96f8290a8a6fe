"""
Tests for MembersController: admin gating, validation and member actions.
"""

import pytest

from notas_ui.controllers import MembersController
from notas_ui.controllers import permissions
from notas_ui.data.demo_members import DEMO_USERS_PAYLOAD
from notas_ui.models.member import MemberRole, parse_members
from notas_ui.services.member_service import ResendAction
from notas_ui.services.member_service_demo import DemoMemberService

ORIGIN = "https://app.test"


class SpyMemberService(DemoMemberService):
    """Demo directory that records which methods were called."""

    def __init__(self, members=None):
        super().__init__(members)
        self.calls: list[str] = []

    async def list_members(self):
        self.calls.append("list_members")
        return await super().list_members()

    async def add_member(self, name, email, role, origin):
        self.calls.append("add_member")
        return await super().add_member(name, email, role, origin)

    async def update_member(self, member_id, display_name, role=None):
        self.calls.append("update_member")
        return await super().update_member(member_id, display_name, role)

    async def remove_member(self, member_id):
        self.calls.append("remove_member")
        return await super().remove_member(member_id)

    async def resend_invite_or_reset_password(self, email, origin):
        self.calls.append("resend")
        return await super().resend_invite_or_reset_password(email, origin)


@pytest.fixture
def directory():
    return SpyMemberService(parse_members(DEMO_USERS_PAYLOAD))


@pytest.fixture
def ana(directory):
    return directory.find_by_email("ana.souza@superia.com.br")


@pytest.fixture
def bruno(directory):
    return directory.find_by_email("bruno.lima@superia.com.br")


def _controller(directory, user):
    return MembersController(directory, user, ORIGIN, page_size=7, debounce_delay=0.01)


# ============================================================================
# TESTS: non-admin rejection
# ============================================================================

class TestNonAdminRejection:
    @pytest.mark.asyncio
    async def test_add_is_rejected_without_backend_call(self, directory, bruno):
        controller = _controller(directory, bruno)
        feedback = await controller.add_member("Novo", "novo@empresa.com.br", "user")
        assert not feedback.ok
        assert feedback.message == permissions.ADD_DENIED
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_remove_is_rejected_without_backend_call(self, directory, bruno, ana):
        controller = _controller(directory, bruno)
        feedback = await controller.remove_member(ana.id)
        assert feedback.message == permissions.REMOVE_DENIED
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_editing_someone_else_is_rejected(self, directory, bruno, ana):
        controller = _controller(directory, bruno)
        feedback = await controller.update_member(ana.id, "Outro Nome", "user")
        assert feedback.message == permissions.EDIT_DENIED
        assert directory.calls == []
        assert ana.display_name == "Ana Souza"

    @pytest.mark.asyncio
    async def test_resend_for_someone_else_is_rejected(self, directory, bruno):
        controller = _controller(directory, bruno)
        feedback = await controller.resend_invite_or_reset_password(
            "carla.mendes@superia.com.br"
        )
        assert feedback.message == permissions.ACTION_DENIED
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_signed_out_user_is_rejected(self, directory):
        controller = _controller(directory, None)
        feedback = await controller.add_member("Novo", "novo@empresa.com.br")
        assert not feedback.ok
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_malformed_role_is_not_admin(self, directory):
        diego = directory.find_by_email("diego.alves@superia.com.br")
        controller = _controller(directory, diego)
        assert not controller.is_admin
        feedback = await controller.remove_member("anyone")
        assert feedback.message == permissions.REMOVE_DENIED


# ============================================================================
# TESTS: self-service
# ============================================================================

class TestSelfService:
    @pytest.mark.asyncio
    async def test_member_edit_of_self_is_still_admin_only(self, directory, bruno):
        controller = _controller(directory, bruno)
        feedback = await controller.update_member(bruno.id, "Bruno L.", "admin")
        assert feedback.message == permissions.EDIT_DENIED
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_user_can_rename_own_profile(self, directory, bruno):
        controller = _controller(directory, bruno)
        feedback = await controller.update_profile(" Bruno L. ")
        assert feedback.message == "Perfil atualizado com sucesso!"
        assert bruno.display_name == "Bruno L."
        assert bruno.role is MemberRole.USER
        assert controller.current_user.display_name == "Bruno L."

    @pytest.mark.asyncio
    async def test_blank_profile_name_is_rejected(self, directory, bruno):
        controller = _controller(directory, bruno)
        feedback = await controller.update_profile("  ")
        assert not feedback.ok
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_user_can_reset_own_password(self, directory, bruno):
        controller = _controller(directory, bruno)
        feedback = await controller.resend_invite_or_reset_password(bruno.email)
        assert feedback.message == "Email para redefinição de senha enviado com sucesso!"


# ============================================================================
# TESTS: admin actions
# ============================================================================

class TestAdminActions:
    @pytest.mark.asyncio
    async def test_validation_runs_before_backend(self, directory, ana):
        controller = _controller(directory, ana)
        feedback = await controller.add_member("Novo", "invalido")
        assert feedback.message == "Email deve ter um formato válido"
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_add_member_invites_and_reloads(self, directory, ana):
        controller = _controller(directory, ana)
        feedback = await controller.add_member(" Fernanda ", "fernanda@empresa.com.br", "admin")
        assert feedback.message == "Convite enviado com sucesso para fernanda@empresa.com.br"
        assert directory.sent_emails[-1] == (
            ResendAction.INVITE,
            "fernanda@empresa.com.br",
            f"{ORIGIN}/set-password",
        )
        assert directory.calls == ["add_member", "list_members"]
        assert controller.page.total_items == 6
        assert not controller.busy

    @pytest.mark.asyncio
    async def test_duplicate_email_is_reported(self, directory, ana):
        controller = _controller(directory, ana)
        feedback = await controller.add_member("Ana 2", "ana.souza@superia.com.br")
        assert feedback.message == "Este email já está cadastrado"

    @pytest.mark.asyncio
    async def test_pending_member_gets_invite(self, directory, ana):
        controller = _controller(directory, ana)
        feedback = await controller.resend_invite_or_reset_password(
            "carla.mendes@superia.com.br"
        )
        assert feedback.message == "Convite reenviado com sucesso!"
        assert directory.sent_emails[-1][0] is ResendAction.INVITE

    @pytest.mark.asyncio
    async def test_confirmed_member_gets_recovery(self, directory, ana):
        controller = _controller(directory, ana)
        feedback = await controller.resend_invite_or_reset_password(
            "bruno.lima@superia.com.br"
        )
        assert feedback.ok
        assert directory.sent_emails[-1] == (
            ResendAction.RECOVERY,
            "bruno.lima@superia.com.br",
            f"{ORIGIN}/reset-password",
        )

    @pytest.mark.asyncio
    async def test_admin_changes_role(self, directory, ana, bruno):
        controller = _controller(directory, ana)
        feedback = await controller.update_member(bruno.id, "Bruno Lima", "admin")
        assert feedback.ok
        assert bruno.role is MemberRole.ADMIN

    @pytest.mark.asyncio
    async def test_remove_member(self, directory, ana, bruno):
        controller = _controller(directory, ana)
        await controller.load()
        feedback = await controller.remove_member(bruno.id)
        assert feedback.message == "Membro removido com sucesso!"
        assert controller.find(bruno.id) is None
        assert controller.page.total_items == 4

    @pytest.mark.asyncio
    async def test_service_error_becomes_feedback(self, directory, ana):
        controller = _controller(directory, ana)
        feedback = await controller.remove_member("missing")
        assert feedback.message == "Usuário não encontrado"


# ============================================================================
# TESTS: listing
# ============================================================================

class TestListing:
    @pytest.mark.asyncio
    async def test_search_and_empty_message(self, directory, ana):
        controller = _controller(directory, ana)
        await controller.load()
        page = await controller.search("souza")
        assert [m.email for m in page.items] == ["ana.souza@superia.com.br"]
        await controller.search("zzz")
        assert controller.empty_message == 'Nenhum membro encontrado para "zzz"'

    @pytest.mark.asyncio
    async def test_sort_by_role_label(self, directory, ana):
        controller = _controller(directory, ana)
        await controller.load()
        controller.sort_by("role")
        assert controller.page.items[0].role is MemberRole.ADMIN
