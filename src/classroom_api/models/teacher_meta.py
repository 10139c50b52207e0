from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Text

from .base import Base


class TeacherMetaModel(Base):
    """Public profile of a teacher, searchable by tag."""

    __tablename__ = "teacher_meta"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )
    tags_id = Column(JSON, default=list)
    about_teacher = Column(Text, nullable=True)
    can_help_with = Column(Text, nullable=True)
    resume = Column(Text, nullable=True)
