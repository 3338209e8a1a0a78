import logging
import uuid
from datetime import timedelta
from sqlalchemy.orm import Session

from stack_assist.config import settings
from stack_assist.core.clock import utcnow
from stack_assist.core.exceptions import AuthError
from stack_assist.core.security import create_access_token
from stack_assist.models.identity import AuthSession, Identity, SessionEndReason
from stack_assist.repositories.user_repository import IdentityRepository

logger = logging.getLogger(__name__)


class SessionService:
    """
    Server-side sessions with an inactivity timeout.

    Every authenticated request counts as activity and resets the idle
    clock. A session idle for SESSION_IDLE_TIMEOUT_MINUTES or longer is
    ended (reason "inactivity") the next time it is presented, exactly as if
    the user had logged out.
    """

    def __init__(self, db: Session):
        self.db = db
        self.identity_repo = IdentityRepository(db)

    @property
    def idle_timeout(self) -> timedelta:
        return timedelta(minutes=settings.SESSION_IDLE_TIMEOUT_MINUTES)

    def open_session(self, identity: Identity) -> tuple[AuthSession, str]:
        """
        Start a session and issue its access token.

        Returns:
            Tuple of (session, bearer token)
        """
        now = utcnow()
        auth_session = AuthSession(
            id=uuid.uuid4().hex,
            identity_id=identity.id,
            created_at=now,
            last_activity_at=now,
        )
        auth_session = self.identity_repo.add_session(auth_session)
        logger.info("Session %s opened for identity %s", auth_session.id, identity.id)
        return auth_session, create_access_token(identity.id, auth_session.id)

    def validate(self, identity_id: int, session_id: str) -> AuthSession:
        """
        Check a session presented with a request and record the activity.

        Raises:
            AuthError: Unknown session, session of another identity, ended
                session, or a session that has just timed out
        """
        auth_session = self.identity_repo.get_session(session_id)
        if auth_session is None or auth_session.identity_id != identity_id:
            raise AuthError("Session not found")

        if not auth_session.is_active:
            raise AuthError("Session has ended")

        now = utcnow()
        if now - auth_session.last_activity_at >= self.idle_timeout:
            self.end_session(auth_session, SessionEndReason.INACTIVITY, now)
            raise AuthError("Session expired due to inactivity")

        return self.identity_repo.touch_session(auth_session, now)

    def end_session(
        self,
        auth_session: AuthSession,
        reason: SessionEndReason = SessionEndReason.LOGOUT,
        now=None,
    ) -> None:
        """End a session; ending an already ended session is a no-op."""
        if not auth_session.is_active:
            return

        auth_session.ended_at = now or utcnow()
        auth_session.end_reason = reason
        self.identity_repo.save()
        logger.info("Session %s ended (%s)", auth_session.id, reason.value)

    def end_all_sessions(self, identity_id: int, reason: SessionEndReason) -> int:
        """End every open session of an identity and return how many were ended."""
        now = utcnow()
        open_sessions = self.identity_repo.get_active_sessions(identity_id)
        for auth_session in open_sessions:
            auth_session.ended_at = now
            auth_session.end_reason = reason
        self.identity_repo.save()
        if open_sessions:
            logger.info(
                "Ended %d session(s) for identity %s (%s)",
                len(open_sessions),
                identity_id,
                reason.value,
            )
        return len(open_sessions)
