import logging
from urllib.parse import urlencode
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stack_assist.config import settings
from stack_assist.core.exceptions import AuthError, ValidationException
from stack_assist.core.mailer import MailSender
from stack_assist.core.security import (
    hash_password,
    verify_password,
    create_password_setup_token,
    decode_password_setup_token,
    password_fingerprint,
)
from stack_assist.models.identity import Identity, AuthSession, SessionEndReason
from stack_assist.models.team_invite import InviteStatus
from stack_assist.models.team_member import MemberStatus
from stack_assist.models.user import User
from stack_assist.repositories.team_invite_repository import TeamInviteRepository
from stack_assist.repositories.team_member_repository import TeamMemberRepository
from stack_assist.repositories.user_repository import IdentityRepository, UserRepository
from stack_assist.services.session_service import SessionService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """Service for registration, login, logout and password setup"""

    def __init__(self, db: Session):
        self.db = db
        self.identity_repo = IdentityRepository(db)
        self.user_repo = UserRepository(db)
        self.member_repo = TeamMemberRepository(db)
        self.invite_repo = TeamInviteRepository(db)
        self.sessions = SessionService(db)

    def register(self, email: str, password: str, company_name: str) -> tuple[AuthSession, str]:
        """
        Create an owner identity and its tenant profile, then log in.

        Identity and profile are written in one transaction, so a failed
        profile write leaves no orphaned identity behind.

        Raises:
            ValidationException: If the email is in use or the password is weak
        """
        email = email.lower()
        self._check_password_strength(password)

        if self.identity_repo.get_by_email(email):
            raise ValidationException("Email already in use")

        identity = Identity(email=email, password_hash=hash_password(password))
        try:
            self.db.add(identity)
            self.db.flush()
            self.db.add(User(id=identity.id, email=email, company_name=company_name))
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationException("Email already in use")

        self.db.refresh(identity)
        logger.info("Registered tenant %s (%s)", identity.id, company_name)
        return self.sessions.open_session(identity)

    def login(self, email: str, password: str) -> tuple[AuthSession, str]:
        """
        Verify credentials and open a session.

        Pending team memberships for this email become active on login.

        Raises:
            AuthError: If the email is unknown or the password is wrong
        """
        identity = self.identity_repo.get_by_email(email.lower())
        if identity is None or not verify_password(password, identity.password_hash):
            raise AuthError("Invalid email or password")

        self._activate_memberships(identity)
        return self.sessions.open_session(identity)

    def logout(self, auth_session: AuthSession) -> None:
        """End the caller's session"""
        self.sessions.end_session(auth_session)

    async def send_password_setup_email(
        self,
        email: str,
        mail_sender: MailSender,
        continue_params: dict | None = None,
        from_name: str | None = None,
    ) -> None:
        """
        Email a password-setup link.

        continue_params are appended to the login URL the user lands on
        afterwards (the team invitation uses email, type, owner, company).

        Raises:
            EmailDeliveryException: If the email could not be sent
        """
        identity = self.identity_repo.get_by_email(email.lower())
        token = create_password_setup_token(
            email, identity.password_hash if identity else None
        )
        continue_url = f"{settings.APP_URL}/login"
        if continue_params:
            continue_url = f"{continue_url}?{urlencode(continue_params)}"

        link = f"{settings.APP_URL}/password-setup?" + urlencode(
            {"token": token, "continueUrl": continue_url}
        )
        text = (
            "Use the link below to choose your password.\n\n"
            f"{link}\n\n"
            f"The link expires in {settings.PASSWORD_SETUP_EXPIRE_HOURS} hours."
        )
        await mail_sender.send(email, "Set up your password", text, from_name=from_name)

    def can_set_password(self, email: str) -> bool:
        """An email may set a password if it has an identity or a team invitation."""
        email = email.lower()
        if self.identity_repo.get_by_email(email):
            return True
        return bool(self.member_repo.get_pending_by_email(email))

    def confirm_password_setup(self, token: str, password: str) -> Identity:
        """
        Set a password from a password-setup token.

        Creates the identity for an invited member who has none yet. Resetting
        an existing password ends every open session of that identity.

        Raises:
            AuthError: If the token is invalid, expired or already used
            ValidationException: If the password is weak or no account or
                invitation exists for the email
        """
        email, fingerprint = decode_password_setup_token(token)
        self._check_password_strength(password)

        identity = self.identity_repo.get_by_email(email)
        current = identity.password_hash if identity else None
        if fingerprint != password_fingerprint(current):
            raise AuthError("Password setup link has already been used")

        if identity is not None:
            identity.password_hash = hash_password(password)
            self.db.commit()
            self.sessions.end_all_sessions(identity.id, SessionEndReason.PASSWORD_RESET)
            logger.info("Password reset for identity %s", identity.id)
            return identity

        if not self.member_repo.get_pending_by_email(email):
            raise ValidationException("No account or invitation for this email")

        identity = Identity(email=email, password_hash=hash_password(password))
        self.db.add(identity)
        self.db.commit()
        self.db.refresh(identity)
        logger.info("Identity %s created for invited member %s", identity.id, email)
        return identity

    def _activate_memberships(self, identity: Identity) -> None:
        # Owners act on their own tenant only
        if self.user_repo.get_by_id(identity.id):
            return

        pending = self.member_repo.get_pending_by_email(identity.email)
        if not pending:
            return

        for member in pending:
            member.status = MemberStatus.ACTIVE
            member.member_user_id = identity.id
            for invite in self.invite_repo.get_pending_for(member.owner_id, identity.email):
                invite.status = InviteStatus.ACCEPTED

        self.db.commit()
        logger.info(
            "Activated %d team membership(s) for identity %s", len(pending), identity.id
        )

    @staticmethod
    def _check_password_strength(password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(
                f"Weak password: use at least {MIN_PASSWORD_LENGTH} characters"
            )
