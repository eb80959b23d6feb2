from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from tracker.core.errors import Unauthenticated
from tracker.core.security import decode_access_token
from tracker.db.session import SessionLocal
from tracker.models import User
from tracker.services.gateway import OwnedResourceGateway

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(oauth2_scheme),
) -> User:
    if not token:
        raise Unauthenticated()
    try:
        payload = decode_access_token(token)
    except JWTError as exc:
        raise Unauthenticated() from exc

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthenticated()

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise Unauthenticated()
    return user


def get_gateway(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> OwnedResourceGateway:
    return OwnedResourceGateway(db, current_user.id)
