"""
Admin gating for member actions.

Every admin-only action goes through these checks before any call to the
member directory. A user is an admin only when their role metadata is
exactly "admin"; anything else, including a missing user, is a regular
user.
"""

from notas_ui.models.common import Feedback
from notas_ui.models.member import MemberRecord

ADD_DENIED = "Apenas administradores podem adicionar novos membros."
REMOVE_DENIED = "Apenas administradores podem remover membros."
EDIT_DENIED = "Você não tem permissão para editar este membro."
ACTION_DENIED = "Você não tem permissão para esta ação."


def is_admin(user: MemberRecord | None) -> bool:
    return user is not None and user.is_admin


def require_admin(user: MemberRecord | None, message: str) -> Feedback | None:
    """Return a rejection for non-admins, None when the action may proceed."""
    if is_admin(user):
        return None
    return Feedback.error(message)


def require_admin_or_self(
    user: MemberRecord | None,
    message: str,
    member_id: str | None = None,
    email: str | None = None,
) -> Feedback | None:
    """Allow admins, or a user acting on their own account (by id or e-mail)."""
    if is_admin(user):
        return None
    if user is not None:
        if member_id is not None and member_id == user.id:
            return None
        if email is not None and email == user.email:
            return None
    return Feedback.error(message)


PROTECTED_PREFIXES = ("/notas", "/historico", "/configuracoes")


def is_protected_path(path: str) -> bool:
    """Pages under these prefixes need a signed-in user."""
    return any(
        path == prefix or path.startswith(f"{prefix}/") for prefix in PROTECTED_PREFIXES
    )
