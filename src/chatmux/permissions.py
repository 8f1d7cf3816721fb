"""
Whitelist permissions for rich commands.

A :class:`CommandPermissions` holds three independent "or" gates that are
tried most-specific-first: an explicit user id wins over a role id, which wins
over a channel id. An entirely empty permission set marks the command public.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Iterable


def _freeze(ids: Iterable[str | int] | None) -> frozenset[str]:
    return frozenset(str(i) for i in (ids or ()))


@dataclass(frozen=True)
class CommandPermissions:
    """User, role and channel whitelists. Empty sets mean "no restriction"."""

    user_ids: frozenset[str] = field(default_factory=frozenset)
    role_ids: frozenset[str] = field(default_factory=frozenset)
    chan_ids: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept any iterable of ids (lists, ints from config) and store strings.
        object.__setattr__(self, "user_ids", _freeze(self.user_ids))
        object.__setattr__(self, "role_ids", _freeze(self.role_ids))
        object.__setattr__(self, "chan_ids", _freeze(self.chan_ids))

    @property
    def is_public(self) -> bool:
        return not (self.user_ids or self.role_ids or self.chan_ids)

    @property
    def needs_roles(self) -> bool:
        """True when evaluation requires the actor's guild roles."""

        return bool(self.role_ids)


PUBLIC = CommandPermissions()


class Decision(Enum):
    ALLOW = "allow"
    DENY = "deny"

    def __bool__(self) -> bool:
        return self is Decision.ALLOW


def evaluate(
    permissions: CommandPermissions,
    actor_id: str,
    actor_roles: AbstractSet[str] | Iterable[str],
    channel_id: str,
) -> Decision:
    """
    Decide whether ``actor_id`` may run a command guarded by ``permissions``.

    Order is fixed: public, explicit user, any matching role, channel, deny.
    """

    if permissions.is_public:
        return Decision.ALLOW

    if str(actor_id) in permissions.user_ids:
        return Decision.ALLOW

    if any(str(role) in permissions.role_ids for role in actor_roles):
        return Decision.ALLOW

    if str(channel_id) in permissions.chan_ids:
        return Decision.ALLOW

    return Decision.DENY


__all__ = ["CommandPermissions", "Decision", "PUBLIC", "evaluate"]
