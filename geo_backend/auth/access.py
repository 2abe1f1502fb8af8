"""Ownership rules for mutating shared data.

These are pure decisions. Callers resolve the requestor and load the target
resource first, then ask whether the change is allowed.
"""

import enum
import logging

from geo_backend.core.errors import ForbiddenError
from geo_backend.models.user import Role

logger = logging.getLogger(__name__)


class Decision(enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


def decide(requestor_role: str, requestor_email: str, resource_owner_email: str) -> Decision:
    """Admins may change anything; everyone else only what they created."""
    if requestor_role == Role.ADMIN.value:
        return Decision.ALLOW
    if requestor_email == resource_owner_email:
        return Decision.ALLOW
    return Decision.DENY


def ensure_can_modify(
    requestor_role: str,
    requestor_email: str,
    resource_owner_email: str,
    message: str = "You are not allowed to change data created by someone else.",
) -> None:
    if decide(requestor_role, requestor_email, resource_owner_email) is Decision.DENY:
        logger.info("Denied %s access to a resource owned by %s", requestor_email, resource_owner_email)
        raise ForbiddenError(message)


def require_admin(requestor_role: str, message: str = "Admins only.") -> None:
    if requestor_role != Role.ADMIN.value:
        raise ForbiddenError(message)
