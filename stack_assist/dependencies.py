import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stack_assist.core.exceptions import AuthError
from stack_assist.core.security import extract_session_claims
from stack_assist.database import get_db
from stack_assist.models.access_context import AccessContext
from stack_assist.models.identity import AuthSession, Identity
from stack_assist.models.team_member import MemberStatus
from stack_assist.repositories.team_member_repository import TeamMemberRepository
from stack_assist.repositories.user_repository import IdentityRepository, UserRepository
from stack_assist.services.session_service import SessionService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _access_denied() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> tuple[Identity, AuthSession]:
    """
    FastAPI dependency to authenticate the request.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Validate JWT signature and expiry, read identity and session ids
    3. Check the server-side session is open and not idle too long
    4. Record this request as session activity

    Raises:
        HTTPException 401: If token missing, invalid or the session has ended
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        identity_id, session_id = extract_session_claims(credentials.credentials)
        auth_session = SessionService(db).validate(identity_id, session_id)
    except AuthError as e:
        raise _unauthorized(str(e))

    identity = IdentityRepository(db).get_by_id(identity_id)
    if identity is None:
        raise _unauthorized("Unknown user")

    return identity, auth_session


async def get_access_context(
    current: tuple[Identity, AuthSession] = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> AccessContext:
    """
    FastAPI dependency implementing the access guard.

    - Tenant profile: the caller is an owner acting on their own tenant,
      whatever memberships exist for their email
    - Active TeamMember record: the caller acts on the owner's tenant with
      the member's permissions
    - Any other status, no record at all, or a failed lookup: access denied
      (fail closed)

    Raises:
        HTTPException 401: If not authenticated (see get_current_session)
        HTTPException 403: If access is denied
    """
    identity, auth_session = current

    try:
        owner_profile = UserRepository(db).get_by_id(identity.id)
        member = None if owner_profile else TeamMemberRepository(db).get_for_identity(identity.id)
    except SQLAlchemyError:
        logger.exception("Tenant or membership lookup failed for identity %s", identity.id)
        raise _access_denied()

    if owner_profile is not None:
        return AccessContext(identity=identity, session=auth_session, tenant_id=identity.id)

    if member is None:
        # Invited identity whose membership was removed
        logger.warning("Identity %s has no tenant and no membership", identity.id)
        raise _access_denied()

    if member.status != MemberStatus.ACTIVE:
        logger.warning(
            "Access denied for identity %s: membership %s is %s",
            identity.id,
            member.id,
            member.status.value,
        )
        raise _access_denied()

    return AccessContext(
        identity=identity,
        session=auth_session,
        tenant_id=member.owner_id,
        member=member,
    )
