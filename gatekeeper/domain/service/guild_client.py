"""Guild client port.

The guild API is the Discord side of onboarding: the live invite list,
role grants and direct messages.
"""

from abc import ABC, abstractmethod

from gatekeeper.domain.model.invite import InviteUsage
from gatekeeper.domain.value import MemberId, RoleId


class GuildClient(ABC):
    """Abstract client for the configured guild.

    Implementations raise ``TransportError`` when the API is unreachable or
    refuses the request, and ``SendSuppressedError`` when a member cannot
    be messaged.
    """

    @abstractmethod
    async def fetch_invites(self) -> list[InviteUsage]:
        """Fetch every live invite with its current use counter.

        Returns:
            Invites in the order the guild API reports them
        """
        pass

    @abstractmethod
    async def add_role(self, member_id: MemberId, role_id: RoleId) -> None:
        """Grant a role to a guild member.

        Args:
            member_id: Member to update
            role_id: Role to add
        """
        pass

    @abstractmethod
    async def send_direct_message(self, member_id: MemberId, content: str) -> None:
        """Send a direct message to a member.

        Args:
            member_id: Recipient
            content: Message body
        """
        pass
