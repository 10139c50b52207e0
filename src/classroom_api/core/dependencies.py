"""Dependency injection module for FastAPI.

This module provides request-scoped manager instances for FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from classroom_api.core.database import get_db
from classroom_api.utils import (
    classroom_manager,
    game_manager,
    grade_manager,
    leaderboard_manager,
    lesson_manager,
    lesson_summary_manager,
    parent_child_manager,
    tag_manager,
    teacher_meta_manager,
    user_manager,
)


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_classroom_manager(
    db: Session = Depends(get_db),
) -> classroom_manager.ClassroomManager:
    """Get ClassroomManager instance with request-scoped DB session."""
    return classroom_manager.ClassroomManager(db)


def get_parent_child_manager(
    db: Session = Depends(get_db),
) -> parent_child_manager.ParentChildManager:
    """Get ParentChildManager instance with request-scoped DB session."""
    return parent_child_manager.ParentChildManager(db)


def get_lesson_manager(db: Session = Depends(get_db)) -> lesson_manager.LessonManager:
    return lesson_manager.LessonManager(db)


def get_lesson_summary_manager(
    db: Session = Depends(get_db),
) -> lesson_summary_manager.LessonSummaryManager:
    return lesson_summary_manager.LessonSummaryManager(db)


def get_grade_manager(db: Session = Depends(get_db)) -> grade_manager.GradeManager:
    return grade_manager.GradeManager(db)


def get_game_manager(db: Session = Depends(get_db)) -> game_manager.GameManager:
    return game_manager.GameManager(db)


def get_tag_manager(db: Session = Depends(get_db)) -> tag_manager.TagManager:
    return tag_manager.TagManager(db)


def get_leaderboard_manager(
    db: Session = Depends(get_db),
) -> leaderboard_manager.LeaderboardManager:
    return leaderboard_manager.LeaderboardManager(db)


def get_teacher_meta_manager(
    db: Session = Depends(get_db),
) -> teacher_meta_manager.TeacherMetaManager:
    return teacher_meta_manager.TeacherMetaManager(db)


# Type aliases for dependency injection
UserManagerDep = Annotated[user_manager.UserManager, Depends(get_user_manager)]
ClassroomManagerDep = Annotated[
    classroom_manager.ClassroomManager, Depends(get_classroom_manager)
]
ParentChildManagerDep = Annotated[
    parent_child_manager.ParentChildManager, Depends(get_parent_child_manager)
]
LessonManagerDep = Annotated[lesson_manager.LessonManager, Depends(get_lesson_manager)]
LessonSummaryManagerDep = Annotated[
    lesson_summary_manager.LessonSummaryManager,
    Depends(get_lesson_summary_manager),
]
GradeManagerDep = Annotated[grade_manager.GradeManager, Depends(get_grade_manager)]
GameManagerDep = Annotated[game_manager.GameManager, Depends(get_game_manager)]
TagManagerDep = Annotated[tag_manager.TagManager, Depends(get_tag_manager)]
LeaderboardManagerDep = Annotated[
    leaderboard_manager.LeaderboardManager, Depends(get_leaderboard_manager)
]
TeacherMetaManagerDep = Annotated[
    teacher_meta_manager.TeacherMetaManager, Depends(get_teacher_meta_manager)
]
