from sqlalchemy import Column, String

from .base import Base


class GameModel(Base):
    __tablename__ = "games"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
