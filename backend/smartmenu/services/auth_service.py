"""Registration and login."""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from sqlalchemy.orm import Session

from smartmenu.core.errors import DuplicateEmail, DuplicateUsername, InvalidCredentials, InvalidRequest
from smartmenu.core.rbac import UserRole
from smartmenu.core.security import (
    MAX_PASSWORD_BYTES,
    TokenIssuer,
    get_password_hash,
    password_too_long,
    verify_password,
)
from smartmenu.models.user import User
from smartmenu.services.user_store import UserStore

logger = logging.getLogger("auth")

DEFAULT_ROLE = UserRole.OWNER


@lru_cache
def _dummy_password_hash() -> str:
    # Verified against when the username is unknown so both failure paths
    # spend the same bcrypt time.
    return get_password_hash("smartmenu-dummy-password")


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


class AuthService:
    def __init__(self, db: Session, issuer: TokenIssuer):
        self.users = UserStore(db)
        self.issuer = issuer

    def register(
        self,
        username: str,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        restaurant_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> User:
        """Create an owner account.

        Username and email uniqueness are checked before the insert, in two
        separate queries; concurrent registrations can both pass and then
        race on the table's unique indexes.
        """
        if self.users.exists_by_username(username):
            raise DuplicateUsername()
        if self.users.exists_by_email(email):
            raise DuplicateEmail()
        if password_too_long(password):
            raise InvalidRequest(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            restaurant_name=restaurant_name,
            phone=phone,
            role=DEFAULT_ROLE,
            is_active=True,
        )
        user = self.users.add(user)
        logger.info(f"New user registered: {user.username} (ID: {user.id}, role: {user.role.value})")
        return user

    def login(self, username: str, password: str) -> LoginResult:
        """Verify credentials and issue a token for the username.

        Unknown usernames, wrong passwords and inactive accounts raise the
        same InvalidCredentials error.
        """
        user = self.users.get_by_username(username)
        if user is None:
            verify_password(password, _dummy_password_hash())
            logger.warning(f"Failed login attempt for username: {username}")
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash) or not user.is_active:
            logger.warning(f"Failed login attempt for username: {username} (ID: {user.id})")
            raise InvalidCredentials()

        token = self.issuer.issue(user.username)
        logger.info(f"Successful login: {user.username} (ID: {user.id}, role: {user.role.value})")
        return LoginResult(token=token, user=user)
