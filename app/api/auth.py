"""Authentication helpers and route dependencies."""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from enum import Enum

from fastapi import Depends, Header, HTTPException, status

from app.config.settings import get_settings


class Capability(str, Enum):
    """Actions an authenticated actor may be allowed to perform."""

    DELETE_ATTACHMENTS = "delete_attachments"


@dataclass(frozen=True, slots=True)
class Actor:
    """Caller identified by an internal token."""

    name: str
    capabilities: frozenset[Capability] = field(default_factory=frozenset)

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities


def _token_matches(candidate: str | None, expected: str) -> bool:
    return bool(candidate and expected) and hmac.compare_digest(
        candidate.encode(), expected.encode()
    )


def resolve_actor(token: str | None) -> Actor | None:
    """Map an internal token to an actor, or ``None`` if it is unknown."""

    settings = get_settings()
    if _token_matches(token, settings.admin_token):
        return Actor(name="admin", capabilities=frozenset({Capability.DELETE_ATTACHMENTS}))
    if _token_matches(token, settings.viewer_token):
        return Actor(name="viewer")
    return None


def get_actor(
    x_internal_token: str | None = Header(default=None, alias="X-Internal-Token"),
) -> Actor:
    """
    Resolve the caller of an administrative endpoint.

    A shared-secret check: the admin token may delete attachments, the viewer
    token is authenticated but holds no capabilities.
    """

    settings = get_settings()
    if not settings.admin_token and not settings.viewer_token:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin key is not configured.",
        )

    actor = resolve_actor(x_internal_token)
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid administrative token.",
        )
    return actor


ActorDependency = Depends(get_actor)
