"""
Command types understood by the multiplexer.

Rich commands subclass :class:`Command`::

    from chatmux.commands import Command, CommandSettings

    class Ping(Command):
        settings = CommandSettings(command="ping", help_text="Replies with pong.")

        async def handle(self, ctx):
            await ctx.channel_send("pong")

and are registered with :meth:`chatmux.mux.Mux.register`. Logic-less replies
are plain :class:`SimpleCommand` values registered with
:meth:`chatmux.mux.Mux.register_simple`; they never receive ``init`` and are
never permission-checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chatmux.permissions import PUBLIC, CommandPermissions

if TYPE_CHECKING:
    from chatmux.context import Context
    from chatmux.mux import Mux

__all__ = [
    "Command",
    "CommandSettings",
    "SimpleCommand",
    "normalize_name",
]


def normalize_name(name: str) -> str:
    """Command names are case-insensitive."""

    return name.strip().casefold()


@dataclass(frozen=True, slots=True)
class CommandSettings:
    """Settings the multiplexer needs to know about a rich command."""

    command: str
    help_text: str = ""


@dataclass(frozen=True, slots=True)
class SimpleCommand:
    """A command that always replies with ``content``."""

    command: str
    content: str
    help_text: str = ""


class Command:
    """
    Base class for rich commands.

    Subclasses set :attr:`settings` (and optionally :attr:`permissions`) as
    class attributes or override the accessors, and implement :meth:`handle`.
    """

    settings: CommandSettings
    permissions: CommandPermissions = PUBLIC

    def init(self, mux: "Mux") -> None:
        """Called once by :meth:`Mux.initialize` before messages are served."""

    async def handle(self, ctx: "Context") -> None:
        raise NotImplementedError

    async def handle_help(self, ctx: "Context") -> bool:
        """
        Send detailed help for this command.

        Return ``False`` to let the caller fall back to ``settings.help_text``.
        """

        return False

    def get_settings(self) -> CommandSettings:
        return self.settings

    def get_permissions(self) -> CommandPermissions:
        return self.permissions or PUBLIC

    def __repr__(self) -> str:
        return f"<{type(self).__name__} command={self.get_settings().command!r}>"
