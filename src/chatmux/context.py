"""
Per-dispatch context and the chat-platform seam.

The multiplexer only needs two things from the platform client: sending text to
a channel and looking up a guild member's roles. :class:`ChatClient` captures
that surface so the dispatch core stays independent of discord.py.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Protocol, runtime_checkable

import discord

DEFAULT_MESSAGE_TYPE = "default"


class PlatformError(RuntimeError):
    """Raised by :class:`ChatClient` implementations when a platform call fails."""


@runtime_checkable
class ChatClient(Protocol):
    @property
    def self_id(self) -> str:
        """Identity of the session delivering messages."""
        ...

    async def send_text(self, channel_id: str, text: str) -> Any:
        ...

    async def lookup_member_roles(self, guild_id: str, actor_id: str) -> FrozenSet[str]:
        ...


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """Platform-neutral record of a received chat message."""

    content: str
    author_id: str
    channel_id: str
    guild_id: str = ""
    author_is_bot: bool = False
    type: str = DEFAULT_MESSAGE_TYPE

    @property
    def is_dm(self) -> bool:
        return not self.guild_id

    @classmethod
    def from_discord(cls, message: discord.Message) -> "InboundMessage":
        guild = getattr(message, "guild", None)
        message_type = getattr(message, "type", None)
        return cls(
            content=message.content or "",
            author_id=str(message.author.id),
            channel_id=str(message.channel.id),
            guild_id=str(guild.id) if guild is not None else "",
            author_is_bot=bool(getattr(message.author, "bot", False)),
            type=getattr(message_type, "name", DEFAULT_MESSAGE_TYPE),
        )


@dataclass(slots=True)
class Context:
    """Working record handed to middleware and to the command handler."""

    prefix: str
    command: str
    arguments: List[str]
    client: ChatClient
    message: InboundMessage
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def channel_id(self) -> str:
        return self.message.channel_id

    @property
    def author_id(self) -> str:
        return self.message.author_id

    @property
    def guild_id(self) -> str:
        return self.message.guild_id

    async def channel_send(self, text: str) -> Any:
        """Send ``text`` to the channel the command was invoked from."""

        return await self.client.send_text(self.message.channel_id, text)

    async def channel_sendf(self, fmt: str, *args: Any) -> Any:
        """Like :meth:`channel_send` with printf-style formatting."""

        return await self.client.send_text(self.message.channel_id, fmt % args if args else fmt)


__all__ = [
    "ChatClient",
    "Context",
    "DEFAULT_MESSAGE_TYPE",
    "InboundMessage",
    "PlatformError",
]
