import enum
from datetime import datetime

from sqlalchemy import Column, String, DateTime, Enum

from tracker.db.base import Base, new_id


class UserRole(str, enum.Enum):
    teacher = "teacher"
    admin = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.teacher)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
