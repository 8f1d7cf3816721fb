"""Discord bot bootstrap utilities."""

from __future__ import annotations

import logging
from typing import FrozenSet

import discord

from chatmux.commands.handlers.help import Help
from chatmux.config import settings
from chatmux.context import PlatformError
from chatmux.event_hooks import message_hook, ready_hook
from chatmux.mux import Mux

logger = logging.getLogger(__name__)


def default_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.message_content = True
    return intents


class DiscordChatClient:
    """:class:`~chatmux.context.ChatClient` backed by a ``discord.Client``."""

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    @property
    def self_id(self) -> str:
        user = self._client.user
        return str(user.id) if user is not None else ""

    async def send_text(self, channel_id: str, text: str) -> discord.Message:
        try:
            channel = self._client.get_channel(int(channel_id))
            if channel is None:
                channel = await self._client.fetch_channel(int(channel_id))
            return await channel.send(text)
        except (discord.HTTPException, discord.InvalidData) as exc:
            raise PlatformError(f"Could not send to channel {channel_id}: {exc}") from exc

    async def lookup_member_roles(self, guild_id: str, actor_id: str) -> FrozenSet[str]:
        if not guild_id:
            raise PlatformError(f"User {actor_id} has no guild context for a role lookup")

        try:
            guild = self._client.get_guild(int(guild_id))
            if guild is None:
                guild = await self._client.fetch_guild(int(guild_id))
            member = guild.get_member(int(actor_id))
            if member is None:
                member = await guild.fetch_member(int(actor_id))
        except discord.HTTPException as exc:
            raise PlatformError(
                f"Could not look up member {actor_id} in guild {guild_id}: {exc}"
            ) from exc

        return frozenset(str(role.id) for role in member.roles)


class MuxBot(discord.Client):
    """Discord client that feeds every message through a :class:`Mux`."""

    def __init__(self, mux: Mux, *, intents: discord.Intents | None = None) -> None:
        super().__init__(intents=intents or default_intents())
        self.mux = mux
        self.chat_client = DiscordChatClient(self)

    async def on_ready(self) -> None:
        await ready_hook.handle(self, self.mux)

    async def on_message(self, message: discord.Message) -> None:
        await message_hook.handle(self.mux, self.chat_client, message)

    async def close(self) -> None:
        await self.mux.drain(timeout=5)
        await super().close()


def run(mux: Mux) -> None:
    """Start the Discord bot for ``mux`` using configuration from the environment."""

    if not settings.DISCORD_API_TOKEN:
        logger.error("No DISCORD_API_TOKEN configured. Cannot run client.")
        return

    bot = MuxBot(mux)
    try:
        bot.run(settings.DISCORD_API_TOKEN, log_handler=None)
    except discord.LoginFailure as exc:
        logger.error("Login failed: %s", exc)


def main() -> None:
    """Run a bot with only the built-in help command registered."""

    mux = settings.build_mux()
    mux.register(Help())
    mux.initialize()
    run(mux)
