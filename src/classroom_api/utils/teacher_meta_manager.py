import logging
import secrets
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classroom_api.core.exceptions import (
    ProfileAlreadyExistsError,
    TeacherMetaNotFoundError,
    ValidationError,
)
from classroom_api.models.teacher_meta import TeacherMetaModel
from classroom_api.models.user import Role, UserModel
from classroom_api.utils.tag_manager import TagManager

logger = logging.getLogger(__name__)


class TeacherMetaManager:
    """Teacher profiles: about text, help topics, resume, and tags."""

    def __init__(self, db: Session):
        self.db = db

    def _check_tags(self, tags_id: List[str]) -> None:
        if TagManager(self.db).missing_tag_ids(tags_id):
            raise ValidationError("One or more tags not found")

    def get_meta(self, user_id: int) -> TeacherMetaModel:
        meta = (
            self.db.query(TeacherMetaModel)
            .filter(TeacherMetaModel.user_id == user_id)
            .first()
        )
        if meta is None:
            raise TeacherMetaNotFoundError(user_id)
        return meta

    def create_meta(
        self,
        user_id: int,
        tags_id: Optional[List[str]] = None,
        about_teacher: Optional[str] = None,
        can_help_with: Optional[str] = None,
        resume: Optional[str] = None,
    ) -> TeacherMetaModel:
        """Create the profile of a teacher.

        Raises:
            ProfileAlreadyExistsError: If the teacher already has one.
            ValidationError: If a tag id does not exist.
        """
        if self.db.query(TeacherMetaModel).filter(TeacherMetaModel.user_id == user_id).first():
            raise ProfileAlreadyExistsError()
        tags_id = list(dict.fromkeys(tags_id or []))
        self._check_tags(tags_id)
        meta = TeacherMetaModel(
            id=secrets.token_hex(8),
            user_id=user_id,
            tags_id=tags_id,
            about_teacher=about_teacher,
            can_help_with=can_help_with,
            resume=resume,
        )
        try:
            self.db.add(meta)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ProfileAlreadyExistsError() from e
        self.db.refresh(meta)
        logger.info("Created teacher metadata for user %s", user_id)
        return meta

    def update_meta(self, user_id: int, **fields) -> TeacherMetaModel:
        """Update the given fields; None values are left unchanged."""
        meta = self.get_meta(user_id)
        tags_id = fields.pop("tags_id", None)
        if tags_id is not None:
            tags_id = list(dict.fromkeys(tags_id))
            self._check_tags(tags_id)
            meta.tags_id = tags_id
        for name in ("about_teacher", "can_help_with", "resume"):
            value = fields.get(name)
            if value is not None:
                setattr(meta, name, value)
        self.db.commit()
        self.db.refresh(meta)
        return meta

    def delete_meta(self, user_id: int) -> None:
        meta = self.get_meta(user_id)
        self.db.delete(meta)
        self.db.commit()
        logger.info("Deleted teacher metadata for user %s", user_id)

    def search_by_tag_names(self, tag_names: List[str]) -> List[dict]:
        """Find teachers whose profile carries any of the named tags."""
        tag_ids = {tag.id for tag in TagManager(self.db).get_tags_by_names(tag_names)}
        if not tag_ids:
            return []
        rows = (
            self.db.query(TeacherMetaModel, UserModel)
            .join(UserModel, UserModel.id == TeacherMetaModel.user_id)
            .filter(UserModel.role_id == int(Role.TEACHER))
            .order_by(UserModel.id)
            .all()
        )
        return [
            {
                "teacher_id": user.id,
                "teacher_name": user.name,
                "teacher_surname": user.surname,
                "about_teacher": meta.about_teacher,
                "can_help_with": meta.can_help_with,
                "tags_id": meta.tags_id or [],
            }
            for meta, user in rows
            if tag_ids.intersection(meta.tags_id or [])
        ]
