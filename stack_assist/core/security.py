import hashlib
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from stack_assist.config import settings
from stack_assist.core.exceptions import AuthError

ALGORITHM = "HS256"
PASSWORD_SETUP_PURPOSE = "password_setup"


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (salt embedded in the result)."""
    if not password:
        raise ValueError("Password cannot be empty")
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a bcrypt hash."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(identity_id: int, session_id: str) -> str:
    """
    Issue a signed access token for an open session.

    Claims:
        sub: identity id (string, as JWT requires)
        sid: server-side session id, checked on every request
    """
    now = datetime.now(UTC)
    payload = {
        "sub": str(identity_id),
        "sid": session_id,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token using SECRET_KEY.

    Args:
        token: JWT access token from Authorization header

    Returns:
        Decoded token payload with 'sub' (identity id), 'sid', 'exp', etc.

    Raises:
        AuthError: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])

        # Validate expiration (jose checks this automatically)
        exp = payload.get("exp")
        if exp is None:
            raise AuthError("Token missing expiration")

        if payload.get("sub") is None:
            raise AuthError("Token missing user identifier")

        return payload

    except JWTError as e:
        raise AuthError(f"Invalid token: {str(e)}")


def extract_session_claims(token: str) -> tuple[int, str]:
    """Extract (identity_id, session_id) from an access token"""
    payload = decode_jwt(token)
    session_id = payload.get("sid")
    if session_id is None:
        raise AuthError("Token missing session identifier")
    try:
        identity_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthError("Token has malformed user identifier")
    return identity_id, session_id


def password_fingerprint(password_hash: str | None) -> str:
    """Short digest of a password hash; empty when there is no password yet."""
    if not password_hash:
        return ""
    return hashlib.sha256(password_hash.encode("utf-8")).hexdigest()[:16]


def create_password_setup_token(email: str, password_hash: str | None = None) -> str:
    """
    Single-purpose token letting an invited user choose a password.

    The token carries a fingerprint of the password it replaces, so it stops
    working once any password has been set with it.
    """
    now = datetime.now(UTC)
    payload = {
        "sub": email.lower(),
        "purpose": PASSWORD_SETUP_PURPOSE,
        "pwv": password_fingerprint(password_hash),
        "iat": now,
        "exp": now + timedelta(hours=settings.PASSWORD_SETUP_EXPIRE_HOURS),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_password_setup_token(token: str) -> tuple[str, str]:
    """Return the email and password fingerprint a password-setup token was issued for."""
    payload = decode_jwt(token)
    if payload.get("purpose") != PASSWORD_SETUP_PURPOSE:
        raise AuthError("Invalid token: wrong purpose")
    return payload["sub"], payload.get("pwv", "")
