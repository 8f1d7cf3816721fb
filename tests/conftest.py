import asyncio
import os, sys
from pathlib import Path

import pytest

# Add src/ to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Keep tests independent of a local config.toml / .env
os.environ.setdefault("CHATMUX_CONFIG", str(Path(__file__).resolve().parent / "missing.toml"))
os.environ.setdefault("DISCORD_API_TOKEN", "test-token")

from chatmux.context import InboundMessage, PlatformError  # noqa: E402

BOT_ID = "1"


class FakeChatClient:
    """Records outbound sends and serves canned role lookups."""

    def __init__(self, roles=None, *, lookup_error=None, send_error=None):
        self.sent = []
        self.lookups = []
        self.roles = frozenset(roles or ())
        self.lookup_error = lookup_error
        self.send_error = send_error

    @property
    def self_id(self):
        return BOT_ID

    async def send_text(self, channel_id, text):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((channel_id, text))
        return len(self.sent)

    async def lookup_member_roles(self, guild_id, actor_id):
        self.lookups.append((guild_id, actor_id))
        if self.lookup_error is not None:
            raise self.lookup_error
        return self.roles

    @property
    def texts(self):
        return [text for _, text in self.sent]


def make_message(content, **overrides):
    fields = dict(
        content=content,
        author_id="100",
        channel_id="200",
        guild_id="300",
        author_is_bot=False,
        type="default",
    )
    fields.update(overrides)
    return InboundMessage(**fields)


@pytest.fixture
def client():
    return FakeChatClient()


@pytest.fixture
def failing_lookup_client():
    return FakeChatClient(lookup_error=PlatformError("member vanished"))
