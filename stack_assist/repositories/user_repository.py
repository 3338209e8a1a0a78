from datetime import datetime
from sqlalchemy.orm import Session

from stack_assist.models.identity import Identity, AuthSession
from stack_assist.models.user import User


class UserRepository:
    """Repository for tenant profiles (User model)"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        """Get tenant profile by ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        """Get tenant profile by lower-cased email"""
        return self.db.query(User).filter(User.email == email).first()

    def get_all(self) -> list[User]:
        """Get all tenants (used by the scheduled expiration scan)"""
        return self.db.query(User).order_by(User.id).all()


class IdentityRepository:
    """Repository for Identity and AuthSession operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Identity | None:
        """Get identity by lower-cased email"""
        return self.db.query(Identity).filter(Identity.email == email).first()

    def get_by_id(self, identity_id: int) -> Identity | None:
        """Get identity by ID"""
        return self.db.query(Identity).filter(Identity.id == identity_id).first()

    def get_session(self, session_id: str) -> AuthSession | None:
        """Get session by ID"""
        return self.db.query(AuthSession).filter(AuthSession.id == session_id).first()

    def get_active_sessions(self, identity_id: int) -> list[AuthSession]:
        """Open sessions of an identity"""
        return (
            self.db.query(AuthSession)
            .filter(AuthSession.identity_id == identity_id, AuthSession.ended_at.is_(None))
            .all()
        )

    def add_session(self, auth_session: AuthSession) -> AuthSession:
        """Create a session"""
        self.db.add(auth_session)
        self.db.commit()
        self.db.refresh(auth_session)
        return auth_session

    def touch_session(self, auth_session: AuthSession, now: datetime) -> AuthSession:
        """Reset a session's inactivity clock"""
        auth_session.last_activity_at = now
        self.db.commit()
        return auth_session

    def save(self) -> None:
        self.db.commit()
