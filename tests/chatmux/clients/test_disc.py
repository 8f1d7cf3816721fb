import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import discord
import pytest

from chatmux.clients import disc
from chatmux.clients.disc import DiscordChatClient
from chatmux.context import PlatformError


def _not_found(text):
    return discord.NotFound(SimpleNamespace(status=404, reason="Not Found"), text)


def test_self_id_uses_logged_in_user():
    client = DiscordChatClient(SimpleNamespace(user=SimpleNamespace(id=42)))

    assert client.self_id == "42"
    assert DiscordChatClient(SimpleNamespace(user=None)).self_id == ""


def test_send_text_uses_cached_channel():
    channel = SimpleNamespace(send=AsyncMock(return_value="sent"))
    raw = SimpleNamespace(get_channel=lambda cid: channel if cid == 5 else None)

    result = asyncio.run(DiscordChatClient(raw).send_text("5", "hello"))

    assert result == "sent"
    channel.send.assert_awaited_once_with("hello")


def test_send_text_fetches_uncached_channel():
    channel = SimpleNamespace(send=AsyncMock())
    raw = SimpleNamespace(get_channel=lambda cid: None, fetch_channel=AsyncMock(return_value=channel))

    asyncio.run(DiscordChatClient(raw).send_text("5", "hello"))

    raw.fetch_channel.assert_awaited_once_with(5)
    channel.send.assert_awaited_once_with("hello")


def test_send_text_wraps_http_errors():
    raw = SimpleNamespace(
        get_channel=lambda cid: None,
        fetch_channel=AsyncMock(side_effect=_not_found("Unknown Channel")),
    )

    with pytest.raises(PlatformError):
        asyncio.run(DiscordChatClient(raw).send_text("5", "hello"))


def test_lookup_member_roles_returns_role_ids():
    member = SimpleNamespace(roles=[SimpleNamespace(id=300), SimpleNamespace(id=8)])
    guild = SimpleNamespace(get_member=lambda uid: member if uid == 100 else None)
    raw = SimpleNamespace(get_guild=lambda gid: guild if gid == 300 else None)

    roles = asyncio.run(DiscordChatClient(raw).lookup_member_roles("300", "100"))

    assert roles == frozenset({"300", "8"})


def test_lookup_member_roles_fetches_missing_member():
    member = SimpleNamespace(roles=[SimpleNamespace(id=8)])
    guild = SimpleNamespace(get_member=lambda uid: None, fetch_member=AsyncMock(return_value=member))
    raw = SimpleNamespace(get_guild=lambda gid: None, fetch_guild=AsyncMock(return_value=guild))

    roles = asyncio.run(DiscordChatClient(raw).lookup_member_roles("300", "100"))

    assert roles == frozenset({"8"})
    guild.fetch_member.assert_awaited_once_with(100)


def test_lookup_member_roles_wraps_missing_member():
    guild = SimpleNamespace(
        get_member=lambda uid: None,
        fetch_member=AsyncMock(side_effect=_not_found("Unknown Member")),
    )
    raw = SimpleNamespace(get_guild=lambda gid: guild)

    with pytest.raises(PlatformError):
        asyncio.run(DiscordChatClient(raw).lookup_member_roles("300", "100"))


def test_lookup_member_roles_requires_guild():
    with pytest.raises(PlatformError):
        asyncio.run(DiscordChatClient(SimpleNamespace()).lookup_member_roles("", "100"))


def test_run_without_token_does_not_start(monkeypatch, caplog):
    monkeypatch.setattr(disc.settings, "DISCORD_API_TOKEN", None)
    monkeypatch.setattr(disc, "MuxBot", lambda mux: pytest.fail("bot should not be created"))

    disc.run(object())

    assert "No DISCORD_API_TOKEN configured" in caplog.text
