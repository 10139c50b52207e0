from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from .base import Base, utcnow


class GradeModel(Base):
    __tablename__ = "grades"
    __table_args__ = (
        UniqueConstraint("lesson_id", "student_id", name="uq_grades_lesson_student"),
        CheckConstraint("grade >= 1 AND grade <= 5", name="ck_grades_range"),
    )

    id = Column(String, primary_key=True, index=True)
    lesson_id = Column(
        String, ForeignKey("lessons.id", ondelete="CASCADE"), index=True, nullable=False
    )
    student_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    grade = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
