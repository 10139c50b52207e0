import logging
import secrets
from typing import List, Optional

from sqlalchemy.orm import Session

from classroom_api.core.exceptions import (
    ClassroomNotFoundError,
    LessonNotFoundError,
    ValidationError,
)
from classroom_api.models.classroom import ClassroomModel
from classroom_api.models.grade import GradeModel
from classroom_api.models.lesson import LessonModel, LessonSummaryModel
from classroom_api.utils.game_manager import GameManager

logger = logging.getLogger(__name__)


class LessonManager:
    """Lessons belong to exactly one classroom and reference existing games."""

    def __init__(self, db: Session):
        self.db = db

    def _check_games(self, game_ids: List[str]) -> None:
        if GameManager(self.db).missing_game_ids(game_ids):
            raise ValidationError("One or more games not found")

    def create_lesson(
        self,
        name: str,
        classroom_id: str,
        description: Optional[str] = None,
        game_ids: Optional[List[str]] = None,
    ) -> LessonModel:
        """Create a lesson in a classroom.

        Raises:
            ClassroomNotFoundError: If the classroom does not exist.
            ValidationError: If any game id does not reference a game.
        """
        game_ids = list(game_ids or [])
        if not self.db.query(ClassroomModel).filter(ClassroomModel.id == classroom_id).first():
            raise ClassroomNotFoundError(classroom_id)
        self._check_games(game_ids)

        lesson = LessonModel(
            id=secrets.token_hex(8),
            name=name,
            description=description,
            classroom_id=classroom_id,
            game_ids=game_ids,
        )
        self.db.add(lesson)
        self.db.commit()
        self.db.refresh(lesson)
        logger.info("Created lesson %s in classroom %s", lesson.id, classroom_id)
        return lesson

    def get_lesson(self, lesson_id: str) -> LessonModel:
        lesson = self.db.query(LessonModel).filter(LessonModel.id == lesson_id).first()
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        return lesson

    def list_classroom_lessons(self, classroom_id: str) -> List[LessonModel]:
        return (
            self.db.query(LessonModel)
            .filter(LessonModel.classroom_id == classroom_id)
            .order_by(LessonModel.created_at)
            .all()
        )

    def update_lesson(
        self,
        lesson_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        game_ids: Optional[List[str]] = None,
    ) -> LessonModel:
        """Update the given fields; None leaves a field unchanged."""
        lesson = self.get_lesson(lesson_id)
        if game_ids is not None:
            self._check_games(game_ids)
            lesson.game_ids = list(game_ids)
        if name is not None:
            lesson.name = name
        if description is not None:
            lesson.description = description
        self.db.commit()
        self.db.refresh(lesson)
        return lesson

    def delete_lesson(self, lesson_id: str) -> List[str]:
        """Delete a lesson with its grades and summary record.

        Returns:
            Storage keys of summary files to remove from disk.
        """
        lesson = self.get_lesson(lesson_id)
        file_keys = [
            row.file_key
            for row in self.db.query(LessonSummaryModel.file_key).filter(
                LessonSummaryModel.lesson_id == lesson_id
            )
        ]
        self.db.query(GradeModel).filter(GradeModel.lesson_id == lesson_id).delete(
            synchronize_session="fetch"
        )
        self.db.query(LessonSummaryModel).filter(
            LessonSummaryModel.lesson_id == lesson_id
        ).delete(synchronize_session="fetch")
        self.db.delete(lesson)
        self.db.commit()
        logger.info("Deleted lesson: %s", lesson_id)
        return file_keys
