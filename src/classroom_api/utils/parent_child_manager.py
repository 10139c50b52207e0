"""Parent-child guardianship edges."""

import logging
import secrets
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classroom_api.core.exceptions import UserNotFoundError, ValidationError
from classroom_api.models.parent_child import ParentChildModel
from classroom_api.models.user import Role, UserModel

logger = logging.getLogger(__name__)


class ParentChildManager:
    """Manages links between parents and their children."""

    def __init__(self, db: Session):
        self.db = db

    def link(self, parent_id: int, child_id: int, commit: bool = True) -> ParentChildModel:
        """Link a parent to a student.

        Linking an existing pair returns the existing edge.

        Args:
            parent_id: User ID of the parent.
            child_id: User ID of the child.
            commit: Commit immediately; pass False to keep the insert in the
                caller's transaction.

        Returns:
            The ParentChildModel edge.

        Raises:
            UserNotFoundError: If either user does not exist.
            ValidationError: If the roles are not parent and student.
        """
        parent = self.db.query(UserModel).filter(UserModel.id == parent_id).first()
        if parent is None:
            raise UserNotFoundError(parent_id)
        if parent.role_id != Role.PARENT:
            raise ValidationError("User is not a parent")
        child = self.db.query(UserModel).filter(UserModel.id == child_id).first()
        if child is None:
            raise UserNotFoundError(child_id)
        if child.role_id != Role.STUDENT:
            raise ValidationError("User is not a student")

        existing = self.get_edge(parent_id, child_id)
        if existing is not None:
            return existing

        edge = ParentChildModel(
            id=secrets.token_hex(8), parent_id=parent_id, child_id=child_id
        )
        try:
            self.db.add(edge)
            self.db.flush()
            if commit:
                self.db.commit()
        except IntegrityError:
            # Lost a race against the same link; the unique index kept one row
            self.db.rollback()
            existing = self.get_edge(parent_id, child_id)
            if existing is None:
                raise
            return existing
        logger.info("Linked parent %s to child %s", parent_id, child_id)
        return edge

    def unlink(self, parent_id: int, child_id: int) -> bool:
        """Remove a link. Returns False if there was nothing to remove."""
        deleted = (
            self.db.query(ParentChildModel)
            .filter(
                ParentChildModel.parent_id == parent_id,
                ParentChildModel.child_id == child_id,
            )
            .delete(synchronize_session="fetch")
        )
        self.db.commit()
        if deleted:
            logger.info("Unlinked parent %s from child %s", parent_id, child_id)
        return bool(deleted)

    def get_edge(self, parent_id: int, child_id: int) -> Optional[ParentChildModel]:
        return (
            self.db.query(ParentChildModel)
            .filter(
                ParentChildModel.parent_id == parent_id,
                ParentChildModel.child_id == child_id,
            )
            .first()
        )

    def is_guardian(self, parent_id: int, child_id: int) -> bool:
        return self.get_edge(parent_id, child_id) is not None

    def list_children(self, parent_id: int) -> List[UserModel]:
        return (
            self.db.query(UserModel)
            .join(ParentChildModel, ParentChildModel.child_id == UserModel.id)
            .filter(ParentChildModel.parent_id == parent_id)
            .order_by(UserModel.id)
            .all()
        )

    def list_parent_ids(self, child_id: int) -> List[int]:
        rows = (
            self.db.query(ParentChildModel.parent_id)
            .filter(ParentChildModel.child_id == child_id)
            .all()
        )
        return [row.parent_id for row in rows]
