"""Discord REST client implementation.

Implements the guild client port over the Discord HTTP API (v10) using the
bot token for authorization.
"""

import asyncio

import httpx
import logfire

from gatekeeper.domain.error import SendSuppressedError, TransportError
from gatekeeper.domain.model.invite import InviteUsage
from gatekeeper.domain.service.guild_client import GuildClient
from gatekeeper.domain.value import InviteToken, MemberId, RoleId

# Discord JSON error code for "Cannot send messages to this user"
CANNOT_MESSAGE_USER = 50007


class DiscordGuildClient(GuildClient):
    """Base class for Discord guild clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealDiscordGuildClient(DiscordGuildClient):
    """Discord guild client backed by the REST API."""

    def __init__(
        self,
        bot_token: str,
        guild_id: int,
        api_base_url: str = "https://discord.com/api/v10",
        timeout: float = 10.0,
        max_retry_after: float = 5.0,
    ) -> None:
        """Initialize Discord client.

        Args:
            bot_token: Bot token
            guild_id: Guild the bot manages
            api_base_url: REST API root
            timeout: Per-request timeout in seconds
            max_retry_after: Longest rate limit wait before the single retry
        """
        self.guild_id = guild_id
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout
        self.max_retry_after = max_retry_after
        self._headers = {
            "Authorization": f"Bot {bot_token}",
            "User-Agent": "DiscordBot (gatekeeper, 0.1.0)",
        }

    async def fetch_invites(self) -> list[InviteUsage]:
        """Fetch the guild's live invites.

        Returns:
            Invites in API order

        Raises:
            TransportError: If the request fails or is refused
        """
        response = await self._request("GET", f"/guilds/{self.guild_id}/invites")
        try:
            payload = response.json()
            invites = [
                InviteUsage(
                    token=InviteToken(item["code"]), uses=item.get("uses") or 0
                )
                for item in payload
            ]
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(f"Malformed invite list: {e}") from e
        logfire.info("Guild invites fetched", invite_count=len(invites))
        return invites

    async def add_role(self, member_id: MemberId, role_id: RoleId) -> None:
        """Add a role to a guild member.

        Raises:
            TransportError: If the request fails or is refused
        """
        await self._request(
            "PUT", f"/guilds/{self.guild_id}/members/{member_id}/roles/{role_id}"
        )

    async def send_direct_message(self, member_id: MemberId, content: str) -> None:
        """Open a DM channel with the member and post a message.

        Raises:
            SendSuppressedError: If the member does not accept DMs
            TransportError: If the request fails for any other reason
        """
        channel = await self._request(
            "POST", "/users/@me/channels", json={"recipient_id": str(member_id)}
        )
        try:
            channel_id = channel.json()["id"]
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(f"Malformed DM channel: {e}") from e

        try:
            await self._request(
                "POST", f"/channels/{channel_id}/messages", json={"content": content}
            )
        except _DiscordAPIError as e:
            if e.status_code == 403 and e.code == CANNOT_MESSAGE_USER:
                raise SendSuppressedError(member_id) from e
            raise

    async def _request(
        self, method: str, path: str, json: dict | None = None
    ) -> httpx.Response:
        response = await self._send(method, path, json)
        if response.status_code == 429:
            retry_after = _retry_after(response)
            if retry_after is not None and retry_after <= self.max_retry_after:
                logfire.warn(
                    "Discord rate limited, retrying",
                    method=method,
                    path=path,
                    retry_after=retry_after,
                )
                await asyncio.sleep(retry_after)
                response = await self._send(method, path, json)

        if response.status_code >= 400:
            code = _error_code(response)
            logfire.error(
                "Discord request refused",
                method=method,
                path=path,
                status_code=response.status_code,
                code=code,
                error=response.text,
            )
            raise _DiscordAPIError(method, path, response.status_code, code)
        return response

    async def _send(
        self, method: str, path: str, json: dict | None
    ) -> httpx.Response:
        url = f"{self.api_base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method, url, headers=self._headers, json=json
                )
        except httpx.HTTPError as e:
            logfire.error("Discord HTTP error", method=method, path=path, error=str(e))
            raise TransportError(f"HTTP error calling Discord {method} {path}: {e}")
        return response


class _DiscordAPIError(TransportError):
    """Non-2xx Discord response."""

    def __init__(self, method: str, path: str, status_code: int, code: int | None):
        self.status_code = status_code
        self.code = code
        super().__init__(
            f"Discord {method} {path} failed: {status_code} (code {code})"
        )


def _error_code(response: httpx.Response) -> int | None:
    try:
        return response.json().get("code")
    except (ValueError, AttributeError):
        return None


def _retry_after(response: httpx.Response) -> float | None:
    # The JSON body carries sub-second precision, the header whole seconds
    try:
        body = response.json()
    except ValueError:
        body = None
    value = body.get("retry_after") if isinstance(body, dict) else None
    if value is None:
        value = response.headers.get("Retry-After")
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


class MockDiscordGuildClient(DiscordGuildClient):
    """Mock Discord guild client for testing.

    Keeps the invite list in memory, records role grants and messages, and
    can be told to fail.
    """

    def __init__(self) -> None:
        """Initialize mock client with an empty guild."""
        self.invites: list[InviteUsage] = []
        self.role_grants: list[tuple[MemberId, RoleId]] = []
        self.messages: list[tuple[MemberId, str]] = []
        self.closed_inboxes: set[MemberId] = set()
        self.fail_invite_fetch = False
        self.fail_role_grant = False
        self.fetch_count = 0

    def set_invites(self, *invites: tuple[str, int]) -> None:
        """Replace the live invite list with ``(code, uses)`` pairs."""
        self.invites = [
            InviteUsage(token=InviteToken(code), uses=uses) for code, uses in invites
        ]

    def remove_invite(self, code: str) -> None:
        """Remove an invite as the guild does when it is consumed."""
        self.invites = [i for i in self.invites if i.token.root != code]

    async def fetch_invites(self) -> list[InviteUsage]:
        """Return a copy of the invite list after yielding to the loop."""
        self.fetch_count += 1
        # Yield so concurrent resolutions interleave as they would over HTTP
        await asyncio.sleep(0)
        if self.fail_invite_fetch:
            raise TransportError("Missing Access")
        return list(self.invites)

    async def add_role(self, member_id: MemberId, role_id: RoleId) -> None:
        """Record a role grant."""
        if self.fail_role_grant:
            raise TransportError("Unknown Role")
        self.role_grants.append((member_id, role_id))

    async def send_direct_message(self, member_id: MemberId, content: str) -> None:
        """Record a message unless the member's inbox is closed."""
        if member_id in self.closed_inboxes:
            raise SendSuppressedError(member_id)
        self.messages.append((member_id, content))
