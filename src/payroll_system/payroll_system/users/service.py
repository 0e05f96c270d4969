from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.policy import enforce
from ..auth.principal import Principal
from ..auth.tokens import TokenService
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_DEPARTMENT_BY_ROLE, DUPLICATE_EMAIL_MESSAGE, MIN_PASSWORD_LENGTH
from ..core.enums import Action, Resource, Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_LOGIN = "Invalid email or password"


def _normalize_email(email: Optional[str]) -> str:
    value = require_non_empty(email, "email").lower()
    if "@" not in value:
        raise ValidationError("email is not valid", field="email")
    return value


def _parse_role(role) -> Role:
    try:
        return Role(str(role).strip().lower())
    except ValueError:
        raise ValidationError("role must be admin or employee", field="role")


class AuthService:
    """Use case: sign up / log in and hand out a bearer credential."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def signup(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: str = Role.EMPLOYEE.value,
        department: Optional[str] = None,
    ) -> Tuple[User, str]:
        email = _normalize_email(email)
        require_min_length(password, "password", MIN_PASSWORD_LENGTH)
        name = require_non_empty(name, "name")
        parsed_role = _parse_role(role)

        if self._users.get_by_email(email):
            raise ValidationError(DUPLICATE_EMAIL_MESSAGE, field="email")

        department = (department or "").strip() or DEFAULT_DEPARTMENT_BY_ROLE[parsed_role.value]
        user = self._users.create_user(
            email=email,
            password_hash=generate_password_hash(password),
            name=name,
            role=parsed_role,
            department=department,
        )
        logger.info("Registered user id=%s role=%s", user.user_id, user.role.value)
        return user, self._tokens.issue(user)

    def login(self, *, email: str, password: str) -> Tuple[User, str]:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            logger.warning("Login failed: unknown email")
            raise AuthenticationError(INVALID_LOGIN)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("Login failed for user id=%s", user.user_id)
            raise AuthenticationError(INVALID_LOGIN)

        return user, self._tokens.issue(user)


class UserService:
    """Use case: look up users (profile, employee directory)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, principal: Principal) -> User:
        user = self._users.get_by_id(principal.user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_employees(self, principal: Principal) -> Sequence[User]:
        enforce(principal, Action.READ, Resource.EMPLOYEE_DIRECTORY)
        return self._users.list_users(role=Role.EMPLOYEE)

    def employee_count(self) -> int:
        return self._users.count_by_role(Role.EMPLOYEE)
