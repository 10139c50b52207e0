"""User database model.

This module defines the User database model using SQLAlchemy.
"""

from enum import IntEnum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from .base import Base, utcnow


class Role(IntEnum):
    """Global user roles, stored as integers."""

    STUDENT = 1
    PARENT = 2
    TEACHER = 3


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role_id = Column(Integer, nullable=False)
    name = Column(String, nullable=True)
    surname = Column(String, nullable=True)
    # Back-reference to the single classroom the user belongs to
    classroom_id = Column(
        String,
        ForeignKey("classrooms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow)

    @property
    def role(self) -> Role:
        return Role(self.role_id)
