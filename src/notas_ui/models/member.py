"""
Team member models built from the auth service's user objects.

The auth service stores the display name and role in `user_metadata`.
Roles are normalised to exactly "user" or "admin"; any other value,
including a missing one, is treated as "user".
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from notas_ui.lib import logs

LOG = logs.logger(__file__)

DEFAULT_DISPLAY_NAME = "Usuário"

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class MemberRole(str, Enum):
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def normalize(cls, value: Any) -> "MemberRole":
        """Coerce any value to a role; only the exact string "admin" is admin."""
        return cls.ADMIN if value == cls.ADMIN.value else cls.USER

    @property
    def label(self) -> str:
        return "Administrador" if self is MemberRole.ADMIN else "Usuário"


class MemberStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"

    @property
    def label(self) -> str:
        return "Confirmado" if self is MemberStatus.CONFIRMED else "Pendente"


@dataclass(slots=True)
class MemberRecord:
    """One account in the tenant's user directory."""

    id: str
    email: str
    display_name: str = DEFAULT_DISPLAY_NAME
    role: MemberRole = MemberRole.USER
    email_confirmed_at: str | None = None
    created_at: str | None = None
    last_sign_in_at: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is MemberRole.ADMIN

    @property
    def status(self) -> MemberStatus:
        """Confirmed once the invite e-mail was accepted, pending before."""
        if self.email_confirmed_at:
            return MemberStatus.CONFIRMED
        return MemberStatus.PENDING


def parse_member(payload: Mapping[str, Any]) -> MemberRecord | None:
    """Build a MemberRecord from an auth-service user object."""
    identifier = payload.get("id")
    if not identifier:
        return None
    metadata = payload.get("user_metadata")
    if not isinstance(metadata, Mapping):
        metadata = {}
    return MemberRecord(
        id=str(identifier),
        email=str(payload.get("email") or ""),
        display_name=str(metadata.get("display_name") or DEFAULT_DISPLAY_NAME),
        role=MemberRole.normalize(metadata.get("role")),
        email_confirmed_at=payload.get("email_confirmed_at") or None,
        created_at=payload.get("created_at") or None,
        last_sign_in_at=payload.get("last_sign_in_at") or None,
    )


def parse_members(payload: Any) -> list[MemberRecord]:
    """
    Parse a user listing (`{"users": [...]}` or a bare array).

    Unexpected shapes yield an empty list.
    """
    if isinstance(payload, Mapping):
        payload = payload.get("users")
    if not isinstance(payload, list):
        return []
    members = [
        member
        for member in (parse_member(item) for item in payload if isinstance(item, Mapping))
        if member is not None
    ]
    if len(members) != len(payload):
        LOG.warning("Skipped %d malformed user objects", len(payload) - len(members))
    return members


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email or ""))


def validate_new_member(name: str, email: str) -> str | None:
    """Return a user-facing error for an invalid invite form, or None."""
    if not (name or "").strip():
        return "Nome é obrigatório"
    if not (email or "").strip():
        return "Email é obrigatório"
    if not is_valid_email(email.strip()):
        return "Email deve ter um formato válido"
    return None


def validate_member_update(display_name: str) -> str | None:
    if not (display_name or "").strip():
        return "Nome é obrigatório"
    return None


def validate_new_password(password: str, confirmation: str) -> str | None:
    """Password rules shared by the reset and set-password pages."""
    if len(password or "") < 6:
        return "A senha deve ter pelo menos 6 caracteres"
    if not confirmation:
        return "Campo obrigatório"
    if password != confirmation:
        return "As senhas não coincidem"
    return None
