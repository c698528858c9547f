"""
Email + password accounts with persisted bearer sessions.

A session is a pair of random tokens stored in ``auth_sessions``: the access
token authenticates requests until ``expires_at``; the refresh token can be
exchanged once for a fresh pair until ``refresh_expires_at`` or sign out.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from filmcraft import models
from filmcraft.core.config import settings

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 200_000


class AuthError(Exception):
    pass


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Hash password with PBKDF2-SHA256, returned as ``salt$hexdigest``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    salt, _, _ = password_hash.partition("$")
    return hmac.compare_digest(hash_password(password, salt), password_hash)


def _generate_token() -> str:
    return secrets.token_urlsafe(32)


def _new_session(db: Session, user: models.User) -> models.AuthSession:
    session = models.AuthSession(
        user_id=user.id,
        access_token=_generate_token(),
        refresh_token=_generate_token(),
        expires_at=datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_TTL_MINUTES),
        refresh_expires_at=datetime.utcnow() + timedelta(days=settings.REFRESH_TOKEN_TTL_DAYS),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def sign_up(db: Session, email: str, password: str) -> models.AuthSession:
    email = email.strip().lower()
    if db.query(models.User).filter(models.User.email == email).first():
        raise AuthError("User already registered")

    user = models.User(email=email, password_hash=hash_password(password))
    db.add(user)
    db.flush()

    # pending invitations for this email now belong to the new account
    (
        db.query(models.Collaborator)
        .filter(models.Collaborator.email == email)
        .update({models.Collaborator.user_id: user.id}, synchronize_session=False)
    )
    db.commit()
    db.refresh(user)

    logger.info(f"[Auth] Signed up user {user.id}")
    return _new_session(db, user)


def sign_in(db: Session, email: str, password: str) -> models.AuthSession:
    user = db.query(models.User).filter(models.User.email == email.strip().lower()).first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthError("Invalid login credentials")

    logger.info(f"[Auth] Signed in user {user.id}")
    return _new_session(db, user)


def refresh_session(db: Session, refresh_token: str) -> models.AuthSession:
    old = (
        db.query(models.AuthSession)
        .filter(models.AuthSession.refresh_token == refresh_token)
        .first()
    )
    if not old:
        raise AuthError("Invalid refresh token")

    user = old.user
    expired = old.refresh_expires_at < datetime.utcnow()
    db.delete(old)
    db.commit()
    if expired:
        logger.info(f"[Auth] Refresh token expired for user {user.id}")
        raise AuthError("Refresh token expired")
    return _new_session(db, user)


def sign_out(db: Session, access_token: str) -> None:
    (
        db.query(models.AuthSession)
        .filter(models.AuthSession.access_token == access_token)
        .delete(synchronize_session=False)
    )
    db.commit()


def user_for_token(db: Session, access_token: str) -> Optional[models.User]:
    session = (
        db.query(models.AuthSession)
        .filter(models.AuthSession.access_token == access_token)
        .first()
    )
    if not session or session.expires_at < datetime.utcnow():
        return None
    return session.user
