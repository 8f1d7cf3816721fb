"""Prefix command multiplexer for chat bots."""

from chatmux.commands import Command, CommandSettings, SimpleCommand
from chatmux.context import ChatClient, Context, InboundMessage, PlatformError
from chatmux.fuzzy import Suggestion, suggest
from chatmux.middleware import Middleware
from chatmux.mux import ErrorTexts, InvalidPrefixError, Mux, Options
from chatmux.permissions import CommandPermissions, Decision, evaluate
from chatmux.registry import RegistryFrozenError

__version__ = "0.1.0"

__all__ = [
    "ChatClient",
    "Command",
    "CommandPermissions",
    "CommandSettings",
    "Context",
    "Decision",
    "ErrorTexts",
    "InboundMessage",
    "InvalidPrefixError",
    "Middleware",
    "Mux",
    "Options",
    "PlatformError",
    "RegistryFrozenError",
    "SimpleCommand",
    "Suggestion",
    "evaluate",
    "suggest",
]
