import asyncio
from types import SimpleNamespace

import discord

from chatmux.commands import SimpleCommand
from chatmux.context import InboundMessage
from chatmux.event_hooks import message_hook, ready_hook
from chatmux.mux import Mux

from conftest import FakeChatClient


def _discord_message(content, *, guild=True, bot=False):
    return SimpleNamespace(
        content=content,
        author=SimpleNamespace(id=100, bot=bot),
        channel=SimpleNamespace(id=200),
        guild=SimpleNamespace(id=300) if guild else None,
        type=discord.MessageType.default,
    )


def test_from_discord_builds_record():
    record = InboundMessage.from_discord(_discord_message("!ping", guild=False, bot=True))

    assert record == InboundMessage(
        content="!ping",
        author_id="100",
        channel_id="200",
        guild_id="",
        author_is_bot=True,
        type="default",
    )
    assert record.is_dm


def test_message_hook_routes_through_mux():
    mux = Mux("!")
    mux.register_simple(SimpleCommand("ping", "pong"))
    client = FakeChatClient()

    asyncio.run(message_hook.handle(mux, client, _discord_message("!ping")))

    assert client.sent == [("200", "pong")]


def test_ready_hook_activates_mux():
    mux = Mux("!")
    bot = SimpleNamespace(user=SimpleNamespace(name="chatmux", id=1))

    asyncio.run(ready_hook.handle(bot, mux))

    assert mux.serving
