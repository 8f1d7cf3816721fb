"""Built-in commands."""

from .help import Help

__all__ = ["Help"]
