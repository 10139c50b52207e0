"""Grades, one per (lesson, student), created or updated in place."""

import logging
import secrets
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classroom_api.core.exceptions import (
    GradeNotFoundError,
    LessonNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from classroom_api.models.base import utcnow
from classroom_api.models.grade import GradeModel
from classroom_api.models.lesson import LessonModel
from classroom_api.models.user import Role, UserModel

logger = logging.getLogger(__name__)

MIN_GRADE = 1
MAX_GRADE = 5


class GradeManager:
    """Manages grade records."""

    def __init__(self, db: Session):
        self.db = db

    def set_grade(
        self,
        lesson_id: str,
        student_id: int,
        grade: int,
        comment: Optional[str] = None,
    ) -> GradeModel:
        """Create or update the grade of a student for a lesson.

        Args:
            lesson_id: Graded lesson.
            student_id: Graded student.
            grade: Value between MIN_GRADE and MAX_GRADE inclusive.
            comment: Optional teacher comment.

        Returns:
            The created or updated GradeModel.

        Raises:
            ValidationError: If grade is out of range or the user is not a
                student.
            LessonNotFoundError: If the lesson does not exist.
            UserNotFoundError: If the student does not exist.
        """
        if isinstance(grade, bool) or not isinstance(grade, int):
            raise ValidationError("Grade must be an integer")
        if grade < MIN_GRADE or grade > MAX_GRADE:
            raise ValidationError(f"Grade must be between {MIN_GRADE} and {MAX_GRADE}")
        if not self.db.query(LessonModel).filter(LessonModel.id == lesson_id).first():
            raise LessonNotFoundError(lesson_id)
        student = self.db.query(UserModel).filter(UserModel.id == student_id).first()
        if student is None:
            raise UserNotFoundError(student_id)
        if student.role_id != Role.STUDENT:
            raise ValidationError("User is not a student")

        existing = self.get_student_lesson_grade(lesson_id, student_id)
        if existing is not None:
            return self._update(existing, grade, comment)

        record = GradeModel(
            id=secrets.token_hex(8),
            lesson_id=lesson_id,
            student_id=student_id,
            grade=grade,
            comment=comment,
        )
        try:
            self.db.add(record)
            self.db.commit()
        except IntegrityError:
            # A concurrent request created the row first; update it instead
            self.db.rollback()
            existing = self.get_student_lesson_grade(lesson_id, student_id)
            if existing is None:
                raise
            return self._update(existing, grade, comment)
        self.db.refresh(record)
        logger.info("Graded student %s on lesson %s: %s", student_id, lesson_id, grade)
        return record

    def _update(self, record: GradeModel, grade: int, comment: Optional[str]) -> GradeModel:
        record.grade = grade
        record.comment = comment
        record.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(record)
        logger.info(
            "Updated grade of student %s on lesson %s: %s",
            record.student_id,
            record.lesson_id,
            grade,
        )
        return record

    def get_student_lesson_grade(self, lesson_id: str, student_id: int) -> Optional[GradeModel]:
        return (
            self.db.query(GradeModel)
            .filter(GradeModel.lesson_id == lesson_id, GradeModel.student_id == student_id)
            .first()
        )

    def list_student_grades(self, student_id: int) -> List[dict]:
        rows = (
            self.db.query(GradeModel, LessonModel.name)
            .join(LessonModel, LessonModel.id == GradeModel.lesson_id)
            .filter(GradeModel.student_id == student_id)
            .order_by(GradeModel.created_at.desc())
            .all()
        )
        return [
            {
                "lesson_id": grade.lesson_id,
                "lesson_name": lesson_name,
                "grade": grade.grade,
                "comment": grade.comment,
            }
            for grade, lesson_name in rows
        ]

    def list_lesson_grades(self, lesson_id: str) -> List[dict]:
        rows = (
            self.db.query(GradeModel, UserModel)
            .join(UserModel, UserModel.id == GradeModel.student_id)
            .filter(GradeModel.lesson_id == lesson_id)
            .order_by(GradeModel.created_at.desc())
            .all()
        )
        return [
            dict(
                _grade_fields(grade),
                student_name=student.name,
                student_surname=student.surname,
            )
            for grade, student in rows
        ]

    def list_classroom_grades(self, classroom_id: str) -> List[dict]:
        rows = (
            self.db.query(GradeModel, LessonModel.name, UserModel)
            .join(LessonModel, LessonModel.id == GradeModel.lesson_id)
            .join(UserModel, UserModel.id == GradeModel.student_id)
            .filter(LessonModel.classroom_id == classroom_id)
            .order_by(GradeModel.created_at.desc())
            .all()
        )
        return [
            dict(
                _grade_fields(grade),
                lesson_name=lesson_name,
                student_name=student.name,
                student_surname=student.surname,
            )
            for grade, lesson_name, student in rows
        ]

    def delete_grade(self, lesson_id: str, student_id: int) -> None:
        record = self.get_student_lesson_grade(lesson_id, student_id)
        if record is None:
            raise GradeNotFoundError(lesson_id, student_id)
        self.db.delete(record)
        self.db.commit()
        logger.info("Deleted grade of student %s on lesson %s", student_id, lesson_id)


def _grade_fields(grade: GradeModel) -> dict:
    return {
        "id": grade.id,
        "lesson_id": grade.lesson_id,
        "student_id": grade.student_id,
        "grade": grade.grade,
        "comment": grade.comment,
        "created_at": grade.created_at,
        "updated_at": grade.updated_at,
    }
