"""
Prefix command multiplexer.

:class:`Mux` receives every inbound chat message and decides what to do with
it. Per message the pipeline is::

    filter -> tokenize -> resolve (simple, rich, fuzzy) -> middleware
           -> permission check -> spawn handler task

Everything up to and including the permission check runs inside
:meth:`Mux.handle`, so decisions are made in message-arrival order. The handler
itself runs as an independent :class:`asyncio.Task` that ``handle`` never
awaits: there is no completion signal, no error channel back to the caller and
no ordering among handler completions.

Typical wiring::

    mux = Mux("!")
    mux.register(Ping())
    mux.register_simple(SimpleCommand("about", "chatmux bot"))
    mux.initialize()

    @client.event
    async def on_message(message):
        await mux.handle(chat_client, InboundMessage.from_discord(message))
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Set

from chatmux.commands import Command, SimpleCommand, normalize_name
from chatmux.context import DEFAULT_MESSAGE_TYPE, ChatClient, Context, InboundMessage, PlatformError
from chatmux.fuzzy import suggest
from chatmux.middleware import Middleware, MiddlewareChain
from chatmux.permissions import evaluate
from chatmux.registry import Registry

logger = logging.getLogger(__name__)


class InvalidPrefixError(ValueError):
    """Raised when the command prefix is not exactly one character."""


@dataclass(frozen=True, slots=True)
class Options:
    """Message filters. Every filter is enabled by default."""

    ignore_bots: bool = True
    ignore_dms: bool = True
    ignore_empty: bool = True
    ignore_non_default: bool = True


@dataclass(frozen=True, slots=True)
class ErrorTexts:
    """User-facing replies for the mux's own terminal states."""

    command_not_found: str = "Command not found."
    no_permissions: str = "You do not have permission to use that command."
    platform_error: str = "There was a weird issue. Maybe report it on Github?"


class Mux:
    def __init__(
        self,
        prefix: str,
        *,
        options: Optional[Options] = None,
        error_texts: Optional[ErrorTexts] = None,
    ) -> None:
        if not isinstance(prefix, str) or len(prefix) != 1:
            raise InvalidPrefixError(f"Prefix {prefix!r} must be exactly 1 character")

        self._prefix = prefix
        self._options = options or Options()
        self._error_texts = error_texts or ErrorTexts()
        self._registry = Registry()
        self._middleware = MiddlewareChain()
        self._tasks: Set[asyncio.Task] = set()

    # --- configuration (setup phase only) ---------------------------------- #

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def options(self) -> Options:
        return self._options

    @property
    def error_texts(self) -> ErrorTexts:
        return self._error_texts

    @property
    def serving(self) -> bool:
        return self._registry.frozen

    def set_options(self, options: Options) -> None:
        self._registry.ensure_mutable("change options")
        self._options = options

    def set_errors(self, error_texts: ErrorTexts) -> None:
        self._registry.ensure_mutable("change error texts")
        self._error_texts = error_texts

    def use_middleware(self, middleware: Middleware) -> Middleware:
        """Append ``middleware`` to the chain. Usable as a decorator."""

        self._registry.ensure_mutable("add middleware")
        return self._middleware.add(middleware)

    def register(self, *commands: Command) -> None:
        self._registry.register(*commands)

    def register_simple(self, *simple_commands: SimpleCommand) -> None:
        self._registry.register_simple(*simple_commands)

    def enable_fuzzy(self) -> None:
        """
        Suggest near matches for unknown commands.

        Every unresolved dispatch then pays for a similarity scan over all
        rich command names.
        """

        self._registry.enable_fuzzy()

    def initialize(self, *commands: Command) -> None:
        """Call ``init`` on ``commands`` or, by default, on every registered command."""

        self._registry.initialize(self, *commands)

    def activate(self) -> None:
        """Leave the setup phase. Called implicitly by the first :meth:`handle`."""

        if not self._registry.frozen:
            self._registry.freeze()
            logger.info("Mux serving with prefix %r", self._prefix)

    # --- introspection ----------------------------------------------------- #

    @property
    def commands(self) -> Mapping[str, Command]:
        return self._registry.commands

    @property
    def simple_commands(self) -> Mapping[str, SimpleCommand]:
        return self._registry.simple_commands

    @property
    def fuzzy(self) -> bool:
        return self._registry.fuzzy

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    # --- dispatch ---------------------------------------------------------- #

    def _drop_reason(self, client: ChatClient, message: InboundMessage) -> Optional[str]:
        opts = self._options
        if message.author_id == str(client.self_id):
            return "self-authored"
        if opts.ignore_empty and not message.content:
            return "empty"
        if opts.ignore_non_default and message.type != DEFAULT_MESSAGE_TYPE:
            return f"message type {message.type}"
        if opts.ignore_bots and message.author_is_bot:
            return "bot author"
        if opts.ignore_dms and message.is_dm:
            return "direct message"
        if not message.content.startswith(self._prefix):
            return "no prefix"
        return None

    async def handle(self, client: ChatClient, message: InboundMessage) -> None:
        """Entry point for the platform's message-received event."""

        self.activate()

        reason = self._drop_reason(client, message)
        if reason is not None:
            logger.debug("Ignoring message in %s: %s", message.channel_id, reason)
            return

        args = message.content.split(" ")
        name = normalize_name(args[0][len(self._prefix):])

        simple = self._registry.get_simple(name)
        if simple is not None:
            logger.debug("Simple command %s in %s", name, message.channel_id)
            await self._reply(client, message.channel_id, simple.content)
            return

        command = self._registry.get_command(name)
        if command is None:
            await self._not_found(client, message, name)
            return

        ctx = Context(
            prefix=self._prefix,
            command=name,
            arguments=args[1:],
            client=client,
            message=message,
        )
        self._middleware.run(ctx)

        permissions = command.get_permissions()
        if not permissions.is_public:
            roles = frozenset()
            if permissions.needs_roles:
                try:
                    roles = await client.lookup_member_roles(message.guild_id, message.author_id)
                except PlatformError:
                    logger.exception(
                        "Role lookup failed for user %s in guild %s",
                        message.author_id,
                        message.guild_id or "<dm>",
                    )
                    await self._reply(client, message.channel_id, self._error_texts.platform_error)
                    return

            if not evaluate(permissions, message.author_id, roles, message.channel_id):
                logger.debug("User %s denied command %s", message.author_id, name)
                await self._reply(client, message.channel_id, self._error_texts.no_permissions)
                return

        self._spawn(command, ctx)

    async def _not_found(self, client: ChatClient, message: InboundMessage, name: str) -> None:
        if self._registry.fuzzy:
            suggestions = suggest(name, self._registry.command_names)
            if suggestions:
                lines = "".join(f"- `{self._prefix}{s.name}`\n" for s in suggestions)
                logger.debug("Suggesting %d command(s) for %r", len(suggestions), name)
                await self._reply(
                    client,
                    message.channel_id,
                    f"{self._error_texts.command_not_found} Did you mean: \n{lines}",
                )
                return

        logger.debug("Unknown command %r in %s", name, message.channel_id)
        await self._reply(client, message.channel_id, self._error_texts.command_not_found)

    async def _reply(self, client: ChatClient, channel_id: str, text: str) -> None:
        try:
            await client.send_text(channel_id, text)
        except PlatformError as exc:
            logger.warning("Failed to send reply to channel %s: %s", channel_id, exc)

    def _spawn(self, command: Command, ctx: Context) -> asyncio.Task:
        task = asyncio.create_task(command.handle(ctx), name=f"chatmux:{ctx.command}")
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Handler task %s failed", task.get_name(), exc_info=exc)

    async def drain(self, timeout: Optional[float] = None) -> None:
        """Wait for handler tasks spawned so far. Not used during dispatch."""

        if self._tasks:
            await asyncio.wait(set(self._tasks), timeout=timeout)


__all__ = ["ErrorTexts", "InvalidPrefixError", "Mux", "Options"]
