"""
Abstract base class defining the team member directory contract.

Implementations:
- DemoMemberService: In-memory directory seeded with demo users
- AuthDirectoryMemberService: GoTrue admin REST API over httpx

Admin checks are not part of this contract; they are enforced by the
controllers before any of these calls is issued.
"""

from abc import ABC, abstractmethod
from enum import Enum

from notas_ui.models.member import MemberRecord, MemberRole


class ResendAction(str, Enum):
    """What `resend_invite_or_reset_password` ended up sending."""

    INVITE = "invite"
    RECOVERY = "recovery"


class MemberService(ABC):
    """
    Abstract base class for the user directory.

    All methods raise `MemberServiceError` with a user-facing message on
    failure.
    """

    @abstractmethod
    async def list_members(self) -> list[MemberRecord]:
        """Return every account in the directory."""

    @abstractmethod
    async def get_member(self, member_id: str) -> MemberRecord:
        """Return one account; raises when it does not exist."""

    @abstractmethod
    async def add_member(
        self, name: str, email: str, role: MemberRole | str, origin: str
    ) -> MemberRecord:
        """
        Invite a new member by e-mail.

        Args:
            name: Display name stored in the user metadata.
            email: Address the invite is sent to; must not exist yet.
            role: Requested role, normalised to user/admin.
            origin: Public origin; the invite links to `{origin}/set-password`.
        """

    @abstractmethod
    async def update_member(
        self,
        member_id: str,
        display_name: str,
        role: MemberRole | str | None = None,
    ) -> None:
        """Merge a new display name (and optionally role) into the metadata."""

    @abstractmethod
    async def remove_member(self, member_id: str) -> None:
        """Delete an account."""

    @abstractmethod
    async def resend_invite_or_reset_password(
        self, email: str, origin: str
    ) -> ResendAction:
        """
        Re-send the right e-mail for an account.

        Pending members get a new invite; confirmed members get a password
        recovery link. Unknown e-mails raise.
        """
