"""
Access policies for protected operations.

Two layers:

1. Decision functions (`admin_only`, `admin_or_self`, `admin_or_owner`,
   `has_role`) are pure: they take already-resolved facts and return an
   AccessDecision.
2. AccessPolicyEngine resolves the facts a decision needs (the target
   user's username, the acting user's id) from the user store and raises
   AccessDeniedError when the decision is a denial.

Services call the engine explicitly before they read or mutate protected
state. For resource-scoped checks the service loads the resource first,
so a missing resource surfaces as not-found, never as forbidden.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from shared.models import Principal, Role
from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserRepository
from modules.users.models import User
from .exceptions import AccessDeniedError

logger = logging.getLogger(__name__)

ADMIN_ONLY = "admin_only"
ADMIN_OR_SELF = "admin_or_self"
ADMIN_OR_OWNER = "admin_or_owner"
ROLE_REQUIRED = "role_required"


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of evaluating one policy for one principal."""

    allowed: bool
    policy: str
    reason: Optional[str] = None


def admin_only(principal: Principal) -> AccessDecision:
    if principal.is_admin:
        return AccessDecision(True, ADMIN_ONLY)
    return AccessDecision(False, ADMIN_ONLY, "requires ADMIN")


def admin_or_self(principal: Principal, target_username: Optional[str]) -> AccessDecision:
    """Allow admins, or the principal acting on its own account."""
    if principal.is_admin:
        return AccessDecision(True, ADMIN_OR_SELF)
    if target_username is not None and principal.username == target_username:
        return AccessDecision(True, ADMIN_OR_SELF)
    return AccessDecision(False, ADMIN_OR_SELF, "not the account owner")


def admin_or_owner(principal: Principal, actor_id: Optional[int], owner_id: Optional[int]) -> AccessDecision:
    """Allow admins, or the user whose id owns the resource."""
    if principal.is_admin:
        return AccessDecision(True, ADMIN_OR_OWNER)
    if actor_id is not None and owner_id is not None and actor_id == owner_id:
        return AccessDecision(True, ADMIN_OR_OWNER)
    return AccessDecision(False, ADMIN_OR_OWNER, "not the resource owner")


def has_role(principal: Principal, *roles: Role) -> AccessDecision:
    if principal.role in roles:
        return AccessDecision(True, ROLE_REQUIRED)
    allowed = ", ".join(role.value for role in roles)
    return AccessDecision(False, ROLE_REQUIRED, f"requires one of: {allowed}")


def enforce(principal: Principal, decision: AccessDecision) -> None:
    """Raise AccessDeniedError for a denial, do nothing otherwise."""
    if decision.allowed:
        return
    logger.info(
        "Access denied: user=%s role=%s policy=%s reason=%s",
        principal.username,
        principal.role.value,
        decision.policy,
        decision.reason,
    )
    raise AccessDeniedError(decision.policy, principal.username, decision.reason or "")


class AccessPolicyEngine:
    """Resolves the lookups each policy needs and enforces the decision."""

    def __init__(self, users: IUserRepository):
        self._users = users

    def authorize_admin(self, principal: Principal) -> None:
        enforce(principal, admin_only(principal))

    def authorize_role(self, principal: Principal, *roles: Role) -> None:
        enforce(principal, has_role(principal, *roles))

    def authorize_admin_or_self(self, principal: Principal, user_id: int) -> None:
        """
        Allow admins, or the principal acting on its own account.

        Raises:
            UserNotFoundError: If a non-admin targets an account that does not exist
            AccessDeniedError: If the target is someone else's account
        """
        if principal.is_admin:
            return
        target = self._users.get_by_id(user_id)
        if target is None:
            raise UserNotFoundError(user_id)
        enforce(principal, admin_or_self(principal, target.username))

    def authorize_admin_or_owner(self, principal: Principal, owner_id: int) -> None:
        """
        Allow admins, or the user who owns the resource.

        The caller passes the owner id of a resource it has already loaded.

        Raises:
            UserNotFoundError: If the acting account no longer exists
            AccessDeniedError: If the acting user is not the owner
        """
        if principal.is_admin:
            return
        actor = self.resolve_actor(principal)
        enforce(principal, admin_or_owner(principal, actor.id, owner_id))

    def resolve_actor(self, principal: Principal) -> User:
        """Load the stored account behind a principal."""
        actor = self._users.get_by_username(principal.username)
        if actor is None:
            raise UserNotFoundError(principal.username)
        return actor
