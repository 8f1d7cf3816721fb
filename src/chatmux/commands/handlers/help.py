from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from chatmux.commands import Command, CommandSettings, normalize_name

if TYPE_CHECKING:
    from chatmux.context import Context
    from chatmux.mux import Mux


class Help(Command):
    """List available commands, or show help for one of them."""

    settings = CommandSettings(
        command="help",
        help_text="List available commands. Use `help <command>` for details.",
    )

    def __init__(self) -> None:
        self.mux: Optional["Mux"] = None

    def init(self, mux: "Mux") -> None:
        self.mux = mux

    async def handle(self, ctx: "Context") -> None:
        if self.mux is None:
            await ctx.channel_send("Help is not available yet.")
            return

        target = next((arg for arg in ctx.arguments if arg), None)
        if target is None:
            await ctx.channel_send(self.render_listing())
            return

        await self.describe(ctx, normalize_name(target))

    async def describe(self, ctx: "Context", name: str) -> None:
        """Send help for ``name``, preferring the command's own ``handle_help``."""

        command = self.mux.commands.get(name)
        if command is not None:
            if await command.handle_help(ctx):
                return
            help_text = command.get_settings().help_text or "No help available."
            await ctx.channel_send(f"`{ctx.prefix}{name}`: {help_text}")
            return

        simple = self.mux.simple_commands.get(name)
        if simple is not None:
            help_text = simple.help_text or "No help available."
            await ctx.channel_send(f"`{ctx.prefix}{name}`: {help_text}")
            return

        await ctx.channel_send(self.mux.error_texts.command_not_found)

    def render_listing(self) -> str:
        prefix = self.mux.prefix
        entries = [
            (name, cmd.get_settings().help_text) for name, cmd in self.mux.commands.items()
        ]
        entries += [(name, simple.help_text) for name, simple in self.mux.simple_commands.items()]
        if not entries:
            return "Available commands: None registered"

        lines = ["Available commands:"]
        for name, help_text in sorted(entries):
            lines.append(f"- `{prefix}{name}`" + (f": {help_text}" if help_text else ""))
        return "\n".join(lines)
