import logging
import secrets
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classroom_api.core.exceptions import TagAlreadyExistsError
from classroom_api.models.tag import TagModel

logger = logging.getLogger(__name__)


class TagManager:
    """Tags used to describe what teachers can help with."""

    def __init__(self, db: Session):
        self.db = db

    def list_tags(self) -> List[TagModel]:
        return self.db.query(TagModel).order_by(TagModel.name).all()

    def create_tag(self, name: str) -> TagModel:
        if self.db.query(TagModel).filter(TagModel.name == name).first():
            raise TagAlreadyExistsError(name)
        tag = TagModel(id=secrets.token_hex(8), name=name)
        try:
            self.db.add(tag)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise TagAlreadyExistsError(name) from e
        self.db.refresh(tag)
        logger.info("Created tag: %s", name)
        return tag

    def get_tags_by_names(self, names: List[str]) -> List[TagModel]:
        if not names:
            return []
        return self.db.query(TagModel).filter(TagModel.name.in_(names)).all()

    def missing_tag_ids(self, tag_ids: List[str]) -> List[str]:
        if not tag_ids:
            return []
        found = {
            row.id for row in self.db.query(TagModel.id).filter(TagModel.id.in_(tag_ids))
        }
        return [tag_id for tag_id in tag_ids if tag_id not in found]
