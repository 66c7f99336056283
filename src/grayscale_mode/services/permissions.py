"""Permission Service

Default management-privilege check for the admin bar toggle. The host owns
authorization; this service only supplies a sensible stand-in (administrators
may manage options, nobody else) that hosts can replace with their own
predicate or extend through the role matrix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Set

from grayscale_mode.config.settings import MANAGE_CAPABILITY

__all__ = ["PermissionService", "PermissionContext", "DEFAULT_ROLE_CAPABILITIES"]

DEFAULT_ROLE_CAPABILITIES: Dict[str, Set[str]] = {
    "administrator": {MANAGE_CAPABILITY},
    "editor": set(),
    "author": set(),
    "subscriber": set(),
}


@dataclass
class PermissionContext:
    """Context for evaluating a permission.

    Attributes:
        actor_role: Role of the viewer (e.g., "administrator", "subscriber"); None for anonymous visitors.
        capability: The capability being checked (e.g., "manage_options").
    """

    actor_role: Optional[str] = None
    capability: str = MANAGE_CAPABILITY


class PermissionService:
    """Evaluates whether a role holds a capability.

    Unknown roles and anonymous visitors hold no capabilities.
    """

    def __init__(self, role_matrix: Dict[str, Set[str]] | None = None):
        source = role_matrix if role_matrix is not None else DEFAULT_ROLE_CAPABILITIES
        self._role_matrix: Dict[str, Set[str]] = {k: set(v) for k, v in source.items()}

    def is_allowed(self, ctx: PermissionContext) -> bool:
        if not ctx.actor_role:
            return False
        return ctx.capability in self._role_matrix.get(ctx.actor_role, set())

    def grant(self, role: str, capability: str = MANAGE_CAPABILITY) -> None:
        self._role_matrix.setdefault(role, set()).add(capability)

    def can_manage_options(self, role: Optional[str]) -> bool:
        return self.is_allowed(PermissionContext(actor_role=role))
