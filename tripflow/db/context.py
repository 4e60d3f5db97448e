"""Request context for ownership enforcement."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Request context containing the caller's identity.

    Used to scope trip access to the owning user.
    """

    user_id: str
