from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text

from .base import Base, utcnow


class LessonModel(Base):
    __tablename__ = "lessons"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    classroom_id = Column(
        String, ForeignKey("classrooms.id", ondelete="CASCADE"), index=True, nullable=False
    )
    game_ids = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class LessonSummaryModel(Base):
    """Metadata of the summary file attached to a lesson."""

    __tablename__ = "lesson_summaries"

    id = Column(String, primary_key=True, index=True)
    lesson_id = Column(
        String,
        ForeignKey("lessons.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )
    file_name = Column(String, nullable=False)  # original upload name
    file_key = Column(String, nullable=False)  # name on disk under UPLOAD_DIR
    file_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
