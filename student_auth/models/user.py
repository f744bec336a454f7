"""User model definitions."""

import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import validates

from student_auth.database import Base


class Role(str, enum.Enum):
    """Roles a user account can hold."""
    ADMIN = "admin"
    STUDENT = "student"


ROLE_VALUES = frozenset(role.value for role in Role)


def normalize_email(value: str | None) -> str:
    return (value or "").strip().lower()


class User(Base):
    """Represents one account, admin or student."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", values_callable=lambda roles: [role.value for role in roles]),
        nullable=False,
        default=Role.STUDENT,
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    @validates("email")
    def validate_email(self, _key: str, value: str) -> str:
        return normalize_email(value)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"
