from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from .base import Base, utcnow


class LeaderboardEntryModel(Base):
    __tablename__ = "leaderboard"

    id = Column(String, primary_key=True, index=True)
    game_id = Column(
        String, ForeignKey("games.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    classroom_id = Column(
        String, ForeignKey("classrooms.id", ondelete="CASCADE"), index=True, nullable=False
    )
    value = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
