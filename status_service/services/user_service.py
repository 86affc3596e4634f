"""User service operations."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from status_service.models.user import User, normalize_user_role

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username).limit(1))


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def create_user(db: Session, username: str, hashed_password: str, role: str) -> User:
    canonical_role = normalize_user_role(role)
    user = User(username=username, password_hash=hashed_password, role=canonical_role, is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def ensure_admin_user(db: Session, username: str, hashed_password: str) -> bool:
    """Create the bootstrap admin unless the username is already taken.

    Returns:
        bool: True when the user existed before this call.
    """
    existing = get_user_by_username(db=db, username=username)
    if existing is not None:
        logger.info("[BOOTSTRAP] Admin exists")
        return True
    create_user(db=db, username=username, hashed_password=hashed_password, role="ADMIN")
    logger.warning("[SECURITY] Bootstrap admin account created: %s", username)
    return False
