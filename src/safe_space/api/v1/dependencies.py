"""Shared API dependencies for authentication and common functionality."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from safe_space.core.errors import Forbidden, InvalidInput, Unauthenticated
from safe_space.core.identifiers import parse_identifier, parse_optional_identifier
from safe_space.core.identity import Identity, IdentityVerifier
from safe_space.core.policy import Capability, require_capability
from safe_space.core.settings import Settings
from safe_space.db.session import get_db
from safe_space.models.post import CONTENT_STATUSES
from safe_space.repositories.role_repo import RoleRepository

# HTTP Bearer scheme; missing credentials are handled by the dependencies below
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


def get_identity_verifier(request: Request) -> IdentityVerifier:
    """Return the application's identity verifier."""
    return request.app.state.identity_verifier


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
VerifierDep = Annotated[IdentityVerifier, Depends(get_identity_verifier)]


def get_optional_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    verifier: VerifierDep,
    settings: SettingsDep,
) -> Identity | None:
    """Resolve the caller if any credential was sent.

    Returns None when neither a bearer token nor a session cookie is present.

    Raises:
        Unauthenticated: If a credential is present but does not verify.
    """
    bearer = credentials.credentials if credentials else None
    session_token = request.cookies.get(settings.session_cookie_name)
    if not bearer and not session_token:
        return None
    return verifier.resolve(bearer, session_token)


def get_identity(
    identity: Annotated[Identity | None, Depends(get_optional_identity)],
) -> Identity:
    """Require a verified caller.

    Raises:
        Unauthenticated: If no credential was sent.
    """
    if identity is None:
        raise Unauthenticated("Authentication required")
    return identity


OptionalIdentityDep = Annotated[Identity | None, Depends(get_optional_identity)]
IdentityDep = Annotated[Identity, Depends(get_identity)]


def get_role_lookup(db: SessionDep) -> RoleRepository:
    """Return the role store for this request."""
    return RoleRepository(db)


RolesDep = Annotated[RoleRepository, Depends(get_role_lookup)]


def get_admin_identity(identity: IdentityDep, roles: RolesDep) -> Identity:
    """Require a caller whose role grants the admin view."""
    require_capability(identity, roles, Capability.VIEW_ADMIN)
    return identity


def get_moderator_identity(identity: IdentityDep, roles: RolesDep) -> Identity:
    """Require a caller whose role allows moderating content."""
    require_capability(identity, roles, Capability.MODERATE_CONTENT)
    return identity


AdminDep = Annotated[Identity, Depends(get_admin_identity)]
ModeratorDep = Annotated[Identity, Depends(get_moderator_identity)]


# Path identifiers are validated in dependencies declared first on each route
# so a malformed id is rejected before credentials or storage are touched.

def valid_post_id(id: str) -> str:  # noqa: A002 - path parameter name
    return parse_identifier(id, "post ID")


def valid_comment_id(id: str) -> str:  # noqa: A002 - path parameter name
    return parse_identifier(id, "comment ID")


PostIdDep = Annotated[str, Depends(valid_post_id)]
CommentIdDep = Annotated[str, Depends(valid_comment_id)]


@dataclass(frozen=True)
class Page:
    """Validated `limit`/`offset` query parameters."""

    limit: int
    offset: int


def get_page(
    settings: SettingsDep,
    limit: int | None = Query(None, ge=1, description="Maximum number of rows to return"),
    offset: int = Query(0, ge=0, description="Number of rows to skip"),
) -> Page:
    """Apply the configured default and ceiling to the page size."""
    return Page(min(limit or settings.default_page_size, settings.max_page_size), offset)


def get_status_filter(
    status: str | None = Query(None, description="Only return rows with this status"),
) -> str | None:
    if status is not None and status not in CONTENT_STATUSES:
        raise InvalidInput(f"Invalid status: '{status}'")
    return status


PageDep = Annotated[Page, Depends(get_page)]
StatusFilterDep = Annotated[str | None, Depends(get_status_filter)]


def resolve_acting_user(
    identity: Identity | None,
    claimed_id: str | None,
    field: str,
    settings: Settings,
) -> str:
    """Return the user a write should be attributed to.

    The verified caller always wins; a payload id that names someone else is
    rejected. Without a verified caller, the payload id is only trusted when
    the deployment enables legacy open endpoints.

    Raises:
        InvalidIdentifier: If `claimed_id` is not a UUID.
        Forbidden: If `claimed_id` differs from the caller.
        Unauthenticated: If there is no usable identity.
    """
    claimed = parse_optional_identifier(claimed_id, field)
    if identity is not None:
        if claimed is not None and claimed != identity.id:
            raise Forbidden(f"Forbidden - {field} does not match the authenticated user")
        return identity.id
    if settings.legacy_open_endpoints and claimed is not None:
        return claimed
    raise Unauthenticated("Authentication required")


def get_upvoter_id(
    identity: OptionalIdentityDep,
    x_user_id: Annotated[str | None, Header()] = None,
) -> str:
    """Resolve the upvoting user from a token or the `x-user-id` header.

    The header is set by the trusted front end; when a token is also present
    the two have to agree.
    """
    header_id = parse_optional_identifier(x_user_id, "x-user-id")
    if identity is not None:
        if header_id is not None and header_id != identity.id:
            raise Forbidden("Forbidden - x-user-id does not match the authenticated user")
        return identity.id
    if header_id is None:
        raise Unauthenticated("Unauthorized")
    return header_id


UpvoterDep = Annotated[str, Depends(get_upvoter_id)]
