from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint

from .base import Base


class ParentChildModel(Base):
    """Guardianship edge granting a parent access to a student's data."""

    __tablename__ = "parent_child"
    __table_args__ = (
        UniqueConstraint("parent_id", "child_id", name="uq_parent_child_pair"),
    )

    id = Column(String, primary_key=True, index=True)
    parent_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    child_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
