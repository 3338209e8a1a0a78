import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stack_assist.core.exceptions import EmailDeliveryException
from stack_assist.core.mailer import MailSender, get_mail_sender
from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context, get_current_session
from stack_assist.models.access_context import AccessContext
from stack_assist.models.identity import AuthSession, Identity
from stack_assist.repositories.user_repository import UserRepository
from stack_assist.services.auth_service import AuthService
from stack_assist.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    MeResponse,
    PasswordSetupRequest,
    PasswordSetupConfirm,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

PASSWORD_SETUP_SENT = "If the email can set a password, a setup link has been sent"


def _token_response(auth_session: AuthSession, token: str) -> TokenResponse:
    return TokenResponse(
        access_token=token, session_id=auth_session.id, user_id=auth_session.identity_id
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Register an agency owner and log them in"""
    service = AuthService(db)
    auth_session, token = service.register(data.email, data.password, data.company_name)
    return _token_response(auth_session, token)


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Open a session; pending team invitations for the email are activated"""
    service = AuthService(db)
    auth_session, token = service.login(data.email, data.password)
    return _token_response(auth_session, token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current: tuple[Identity, AuthSession] = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """End the session behind the bearer token"""
    _, auth_session = current
    AuthService(db).logout(auth_session)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=MeResponse)
async def get_me(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    """Get the caller's identity, tenant and permissions"""
    profile = UserRepository(db).get_by_id(context.tenant_id)
    member = context.member
    return MeResponse(
        user_id=context.identity.id,
        email=context.identity.email,
        tenant_id=context.tenant_id,
        company_name=profile.company_name if profile else None,
        is_owner=context.is_owner(),
        role=member.role if member else None,
        permissions=member.permissions if member else None,
        session_last_activity_at=context.session.last_activity_at,
    )


@router.post("/password-setup", response_model=MessageResponse)
async def request_password_setup(
    data: PasswordSetupRequest,
    db: Session = Depends(get_db),
    mail_sender: MailSender = Depends(get_mail_sender),
):
    """
    Email a password-setup link.

    The response is the same whether or not the email is known.
    """
    service = AuthService(db)
    if service.can_set_password(data.email):
        try:
            await service.send_password_setup_email(data.email.lower(), mail_sender)
        except EmailDeliveryException as e:
            logger.error("Password setup email failed: %s", e)
    return MessageResponse(message=PASSWORD_SETUP_SENT)


@router.post("/password-setup/confirm", response_model=MessageResponse)
async def confirm_password_setup(data: PasswordSetupConfirm, db: Session = Depends(get_db)):
    """Set the password from a setup token"""
    AuthService(db).confirm_password_setup(data.token, data.password)
    return MessageResponse(message="Password set. You can now log in")
