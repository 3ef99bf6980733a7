"""Roles, capabilities and the per-request authentication gate."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, FrozenSet, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from smartmenu.core.errors import TokenError
from smartmenu.core.security import TokenIssuer, get_token_issuer
from smartmenu.db.session import get_db

logger = logging.getLogger("auth")

BEARER_PREFIX = "Bearer "


class UserRole(str, Enum):
    """User roles for RBAC."""

    ADMIN = "admin"
    OWNER = "owner"
    STAFF = "staff"
    CUSTOMER = "customer"


class Capability(str, Enum):
    """Actions a role may be granted."""

    MANAGE_MENU = "manage_menu"
    MANAGE_TABLES = "manage_tables"
    MANAGE_ORDERS = "manage_orders"
    VIEW_FEEDBACK = "view_feedback"


ROLE_CAPABILITIES: dict[UserRole, FrozenSet[Capability]] = {
    UserRole.ADMIN: frozenset(Capability),
    UserRole.OWNER: frozenset({
        Capability.MANAGE_MENU,
        Capability.MANAGE_TABLES,
        Capability.MANAGE_ORDERS,
        Capability.VIEW_FEEDBACK,
    }),
    # staff accounts are not linked to a restaurant yet
    UserRole.STAFF: frozenset(),
    UserRole.CUSTOMER: frozenset(),
}


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Read-only view of the caller, valid for one request."""

    id: int
    username: str
    email: str
    roles: FrozenSet[UserRole]

    def can(self, capability: Capability) -> bool:
        return any(capability in ROLE_CAPABILITIES[role] for role in self.roles)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class AuthenticationGate:
    """Resolves a bearer token to an identity without ever rejecting the request.

    Missing, invalid or orphaned tokens all yield ``None``; endpoints that
    require an identity turn that into 401/403 themselves.
    """

    def __init__(self, issuer: TokenIssuer, db: Session):
        self.issuer = issuer
        self.db = db

    def resolve(self, authorization: Optional[str]) -> Optional[AuthenticatedIdentity]:
        token = extract_bearer_token(authorization)
        if token is None:
            return None

        try:
            username = self.issuer.validate(token)
        except TokenError as e:
            logger.info(f"Rejected bearer token: {e.detail}")
            return None

        from smartmenu.services.user_store import UserStore

        user = UserStore(self.db).get_by_username(username)
        if user is None:
            logger.warning(f"Token subject no longer exists: {username}")
            return None
        if not user.is_active:
            logger.warning(f"Token presented for inactive user: {username} (ID: {user.id})")
            return None

        return AuthenticatedIdentity(
            id=user.id,
            username=user.username,
            email=user.email,
            roles=frozenset({user.role}),
        )


def authenticate_request(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> Optional[AuthenticatedIdentity]:
    """Router-level dependency run before every API handler.

    The identity is stored on ``request.state`` and returned, so handlers
    receive it explicitly through ``CurrentIdentity``/``OptionalIdentity``.
    """
    identity = AuthenticationGate(issuer, db).resolve(request.headers.get("Authorization"))
    request.state.identity = identity
    if identity is not None:
        logger.debug(f"Authenticated request for user: {identity.username}")
    return identity


def get_current_identity(
    identity: Annotated[Optional[AuthenticatedIdentity], Depends(authenticate_request)],
) -> AuthenticatedIdentity:
    """Require an authenticated caller."""
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


def require_capability(capability: Capability):
    """Dependency to require a capability granted by the caller's role."""

    def capability_checker(
        identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    ) -> AuthenticatedIdentity:
        if not identity.can(capability):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires capability {capability.value}",
            )
        return identity

    return capability_checker


# Common identity dependencies
OptionalIdentity = Annotated[Optional[AuthenticatedIdentity], Depends(authenticate_request)]
CurrentIdentity = Annotated[AuthenticatedIdentity, Depends(get_current_identity)]
CanManageMenu = Annotated[AuthenticatedIdentity, Depends(require_capability(Capability.MANAGE_MENU))]
CanManageTables = Annotated[AuthenticatedIdentity, Depends(require_capability(Capability.MANAGE_TABLES))]
CanManageOrders = Annotated[AuthenticatedIdentity, Depends(require_capability(Capability.MANAGE_ORDERS))]
CanViewFeedback = Annotated[AuthenticatedIdentity, Depends(require_capability(Capability.VIEW_FEEDBACK))]
