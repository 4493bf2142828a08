"""Caller identity for API routes.

Authentication happens upstream; the gateway forwards the authenticated
identity as ``X-Actor-Id`` / ``X-Actor-Role`` headers.
"""

from fastapi import Header, HTTPException

from marketplace.shared.actors import Actor, ActorRole

_ROLES = {role.value for role in ActorRole}


def current_actor(
    x_actor_id: str | None = Header(default=None),
    x_actor_role: str | None = Header(default=None),
) -> Actor:
    if not x_actor_id or not x_actor_role:
        raise HTTPException(status_code=401, detail="Please login to continue")
    if x_actor_role not in _ROLES:
        raise HTTPException(status_code=401, detail=f"Unknown actor role: {x_actor_role}")
    return Actor(id=x_actor_id, role=x_actor_role)
