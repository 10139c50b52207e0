from sqlalchemy import Column, String

from .base import Base


class TagModel(Base):
    __tablename__ = "tags"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
