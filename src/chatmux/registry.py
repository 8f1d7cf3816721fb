"""
Command registry with an explicit setup -> serving phase transition.

Entries are added while the registry is in the setup phase. :meth:`freeze`
moves it to serving; every mutation afterwards raises
:class:`RegistryFrozenError`, so handlers running concurrently only ever read.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from chatmux.commands import Command, SimpleCommand, normalize_name

if TYPE_CHECKING:
    from chatmux.mux import Mux

logger = logging.getLogger(__name__)


class RegistryFrozenError(RuntimeError):
    """Raised when the command set is mutated after serving has started."""


class Registry:
    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._simple: Dict[str, SimpleCommand] = {}
        self._fuzzy = False
        self._command_names: List[str] = []
        self._frozen = False

    # --- phase ------------------------------------------------------------- #

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        if self._frozen:
            return
        self._frozen = True
        logger.info(
            "Registry frozen with %d command(s) and %d simple command(s)",
            len(self._commands),
            len(self._simple),
        )

    def ensure_mutable(self, action: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot {action} after the mux started serving")

    # --- registration ------------------------------------------------------ #

    def register(self, *commands: Command) -> None:
        """
        Insert or overwrite rich commands.

        Nameless commands are skipped, as are names already taken by a simple
        command: simple commands always win resolution.
        """

        self.ensure_mutable("register commands")
        for command in commands:
            name = normalize_name(command.get_settings().command)
            if not name:
                logger.debug("Skipping command %r with empty name", command)
                continue
            if name in self._simple:
                logger.warning("Command %s is shadowed by a simple command; skipping", name)
                continue
            self._commands[name] = command
            if self._fuzzy and name not in self._command_names:
                self._command_names.append(name)
            logger.debug("Registered command %s", name)

    def register_simple(self, *simple_commands: SimpleCommand) -> None:
        """Insert or overwrite simple commands, evicting rich commands of the same name."""

        self.ensure_mutable("register simple commands")
        for simple in simple_commands:
            name = normalize_name(simple.command)
            if not name:
                logger.debug("Skipping simple command with empty name")
                continue
            if self._commands.pop(name, None) is not None:
                logger.debug("Simple command %s replaces command of the same name", name)
                if name in self._command_names:
                    self._command_names.remove(name)
            self._simple[name] = simple
            logger.debug("Registered simple command %s", name)

    def enable_fuzzy(self) -> None:
        """Turn on suggestions and build the candidate list from rich commands."""

        self.ensure_mutable("enable fuzzy matching")
        self._fuzzy = True
        self._command_names = list(self._commands)
        logger.info("Fuzzy matching enabled over %d command(s)", len(self._command_names))

    def initialize(self, mux: "Mux", *commands: Command) -> None:
        """
        Run ``init`` on ``commands``, or on every registered rich command when
        none are given. Simple commands carry no logic and are never initialized.
        """

        self.ensure_mutable("initialize commands")
        if not commands and not self._commands:
            return

        targets = commands or tuple(self._commands.values())
        for command in targets:
            command.init(mux)
        logger.info("Initialized %d command(s)", len(targets))

    # --- lookup ------------------------------------------------------------ #

    @property
    def fuzzy(self) -> bool:
        return self._fuzzy

    @property
    def command_names(self) -> List[str]:
        return list(self._command_names)

    @property
    def commands(self) -> Mapping[str, Command]:
        return MappingProxyType(self._commands)

    @property
    def simple_commands(self) -> Mapping[str, SimpleCommand]:
        return MappingProxyType(self._simple)

    def get_command(self, name: str) -> Optional[Command]:
        return self._commands.get(normalize_name(name))

    def get_simple(self, name: str) -> Optional[SimpleCommand]:
        return self._simple.get(normalize_name(name))


__all__ = ["Registry", "RegistryFrozenError"]
