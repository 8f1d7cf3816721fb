import logging

import discord

from chatmux.mux import Mux

logger = logging.getLogger(__name__)


async def handle(client: discord.Client, mux: Mux):
    """Log the session identity and start serving commands."""
    logger.info(f"Logged in as {client.user.name} (ID: {client.user.id})")

    mux.activate()
    logger.info(
        "Serving %d command(s) and %d simple command(s) with prefix %r",
        len(mux.commands),
        len(mux.simple_commands),
        mux.prefix,
    )
