from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import relationship

from .base import Base, utcnow

ROLE_ADMIN = "admin"
ROLE_STUDENT = "student"


class ClassroomModel(Base):
    __tablename__ = "classrooms"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    memberships = relationship(
        "ClassroomMembershipModel",
        back_populates="classroom",
        cascade="all, delete-orphan",
        order_by="ClassroomMembershipModel.id",
    )

    @property
    def admins_id(self) -> list:
        return [m.user_id for m in self.memberships if m.role_in_class == ROLE_ADMIN]

    @property
    def students_id(self) -> list:
        return [m.user_id for m in self.memberships if m.role_in_class == ROLE_STUDENT]


class ClassroomMembershipModel(Base):
    """One row per (classroom, user).

    Teachers may administer any number of classrooms; a student belongs to at
    most one, enforced by a partial unique index on student rows.
    """

    __tablename__ = "classroom_memberships"
    __table_args__ = (
        UniqueConstraint(
            "classroom_id", "user_id", name="uq_classroom_memberships_classroom_user"
        ),
        Index(
            "uq_classroom_memberships_student",
            "user_id",
            unique=True,
            sqlite_where=text("role_in_class = 'student'"),
            postgresql_where=text("role_in_class = 'student'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    classroom_id = Column(
        String, ForeignKey("classrooms.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    role_in_class = Column(String, nullable=False)  # 'admin' or 'student'
    joined_at = Column(DateTime(timezone=True), default=utcnow)

    classroom = relationship("ClassroomModel", back_populates="memberships")
