from datetime import timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from tracker.core.security import create_access_token, verify_password
from tracker.models import User


def build_access_token(user_id: str, expires_minutes: int) -> str:
    return create_access_token(subject=user_id, expires_delta=timedelta(minutes=expires_minutes))


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()
    if not user or not user.password_hash:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
