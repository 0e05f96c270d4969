"""Authorization policy.

One decision function for every (action, resource) pair, evaluated in order,
first match wins. Services call ``enforce`` before touching the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Action, Resource
from ..core.exceptions import AuthorizationError
from .principal import Principal

ACCESS_DENIED = "Access denied"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)


def _deny(reason: str = ACCESS_DENIED) -> Decision:
    return Decision(False, reason)


def can_read(principal: Optional[Principal], owner_id: Optional[int]) -> bool:
    """Visibility rule: admins see everything, employees only their own records."""
    if principal is None:
        return False
    if principal.is_admin:
        return True
    return owner_id is not None and int(owner_id) == principal.user_id


def authorize(
    principal: Optional[Principal],
    action: Action,
    resource: Resource,
    owner_id: Optional[int] = None,
) -> Decision:
    if principal is None:
        return _deny("Not authenticated")

    if resource == Resource.SALARY_SLIP:
        if action in (Action.CREATE, Action.UPDATE):
            return ALLOW if principal.is_admin else _deny()
        if action == Action.READ:
            return ALLOW if can_read(principal, owner_id) else _deny()

    if resource == Resource.EXPENSE:
        if action == Action.CREATE:
            # The created record's owner is forced to principal.user_id by the service.
            return ALLOW if principal.is_employee else _deny()
        if action == Action.READ:
            return ALLOW if can_read(principal, owner_id) else _deny()

    if resource == Resource.EXPENSE_STATUS and action == Action.UPDATE:
        return ALLOW if principal.is_admin else _deny()

    if resource == Resource.EMPLOYEE_DIRECTORY and action == Action.READ:
        return ALLOW if principal.is_admin else _deny()

    return _deny()


def enforce(
    principal: Optional[Principal],
    action: Action,
    resource: Resource,
    owner_id: Optional[int] = None,
) -> None:
    decision = authorize(principal, action, resource, owner_id)
    if not decision.allowed:
        raise AuthorizationError(decision.reason or ACCESS_DENIED)
