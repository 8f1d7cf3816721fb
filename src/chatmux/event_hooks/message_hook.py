import discord

from chatmux.context import ChatClient, InboundMessage
from chatmux.mux import Mux


async def handle(mux: Mux, client: ChatClient, message: discord.Message):
    """Route an incoming Discord message through ``mux``."""

    inbound = InboundMessage.from_discord(message)
    await mux.handle(client, inbound)
