from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from jose import jwt

from tracker.core.config import get_settings

def hash_password(password: str) -> str:
    pw = password.encode("utf-8")
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(pw, salt).decode("utf-8")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )

def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    current = get_settings()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=current.access_token_expire_minutes))
    payload = {"sub": subject, "exp": expire}
    return jwt.encode(payload, current.secret_key, algorithm=current.algorithm)

def decode_access_token(token: str) -> dict:
    current = get_settings()
    return jwt.decode(token, current.secret_key, algorithms=[current.algorithm])
