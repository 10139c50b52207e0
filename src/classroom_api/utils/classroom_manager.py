"""Classroom and membership management.

Membership lives in ``classroom_memberships``. A student has at most one row;
a teacher has one admin row per classroom they administer.
``users.classroom_id`` points at the student's classroom, or at the classroom
a teacher most recently created or joined. Both are only ever written
together, inside the same transaction, by the methods below.
"""

import logging
import secrets
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classroom_api.core.exceptions import ClassroomNotFoundError, ConflictError
from classroom_api.models.classroom import (
    ROLE_ADMIN,
    ROLE_STUDENT,
    ClassroomMembershipModel,
    ClassroomModel,
)
from classroom_api.models.grade import GradeModel
from classroom_api.models.leaderboard import LeaderboardEntryModel
from classroom_api.models.lesson import LessonModel, LessonSummaryModel
from classroom_api.models.user import Role, UserModel

logger = logging.getLogger(__name__)

# Global role -> role inside a classroom. Parents never join a classroom.
_ROLE_IN_CLASS = {
    Role.TEACHER: ROLE_ADMIN,
    Role.STUDENT: ROLE_STUDENT,
}


def _unique(ids: Iterable[int]) -> List[int]:
    seen = set()
    result = []
    for user_id in ids:
        if user_id not in seen:
            seen.add(user_id)
            result.append(user_id)
    return result


class ClassroomManager:
    """Manages classrooms and their membership."""

    def __init__(self, db: Session):
        self.db = db

    def create_classroom(self, name: str, creator_id: int) -> ClassroomModel:
        """Create a classroom with the creator as its only admin.

        The creator keeps administering their other classrooms; their
        ``classroom_id`` moves to the new one.
        """
        classroom = ClassroomModel(id=secrets.token_hex(8), name=name)
        self.db.add(classroom)
        self.db.flush()

        creator = self.db.query(UserModel).filter(UserModel.id == creator_id).first()
        if creator is not None:
            self.db.add(
                ClassroomMembershipModel(
                    classroom_id=classroom.id,
                    user_id=creator_id,
                    role_in_class=ROLE_ADMIN,
                )
            )
            creator.classroom_id = classroom.id
        self._commit()
        self.db.refresh(classroom)
        logger.info("Created classroom %s (%s) by user %s", classroom.id, name, creator_id)
        return classroom

    def get_classroom(self, classroom_id: str) -> ClassroomModel:
        model = (
            self.db.query(ClassroomModel)
            .filter(ClassroomModel.id == classroom_id)
            .first()
        )
        if not model:
            raise ClassroomNotFoundError(classroom_id)
        return model

    def list_classrooms_for_admin(self, user_id: int) -> List[ClassroomModel]:
        return (
            self.db.query(ClassroomModel)
            .join(
                ClassroomMembershipModel,
                ClassroomMembershipModel.classroom_id == ClassroomModel.id,
            )
            .filter(
                ClassroomMembershipModel.user_id == user_id,
                ClassroomMembershipModel.role_in_class == ROLE_ADMIN,
            )
            .order_by(ClassroomModel.created_at.desc())
            .all()
        )

    def get_membership(self, classroom_id: str, user_id: int) -> Optional[ClassroomMembershipModel]:
        return (
            self.db.query(ClassroomMembershipModel)
            .filter(
                ClassroomMembershipModel.classroom_id == classroom_id,
                ClassroomMembershipModel.user_id == user_id,
            )
            .first()
        )

    def is_admin(self, classroom_id: str, user_id: int) -> bool:
        membership = self.get_membership(classroom_id, user_id)
        return membership is not None and membership.role_in_class == ROLE_ADMIN

    def is_member(self, classroom_id: str, user_id: int) -> bool:
        return self.get_membership(classroom_id, user_id) is not None

    def add_members(self, classroom_id: str, user_ids: List[int]) -> Tuple[List[int], List[int]]:
        """Add users to a classroom according to their global role.

        Teachers become admins and students become students; repeated ids
        and current members are skipped, parents and unknown ids are ignored.
        Students coming from another classroom are moved; teachers keep
        administering their other classrooms.

        Args:
            classroom_id: Target classroom.
            user_ids: Users to add.

        Returns:
            Tuple of (admin ids, student ids) after the change.

        Raises:
            ClassroomNotFoundError: If the classroom does not exist.
        """
        classroom = self.get_classroom(classroom_id)
        users = self._load_users(user_ids)

        added = []
        for user_id in _unique(user_ids):
            user = users.get(user_id)
            if user is None:
                logger.info("Skipping unknown user %s for classroom %s", user_id, classroom_id)
                continue
            role_in_class = _ROLE_IN_CLASS.get(user.role)
            if role_in_class is None:
                continue
            if self.get_membership(classroom_id, user_id) is not None:
                continue
            if role_in_class == ROLE_STUDENT:
                self._detach_from_other_classroom(user, classroom_id)
            self.db.add(
                ClassroomMembershipModel(
                    classroom_id=classroom_id,
                    user_id=user_id,
                    role_in_class=role_in_class,
                )
            )
            added.append(user_id)

        if added:
            self.db.flush()
            self.db.query(UserModel).filter(UserModel.id.in_(added)).update(
                {UserModel.classroom_id: classroom_id}, synchronize_session="fetch"
            )
        self._commit()
        self.db.refresh(classroom)
        logger.info("Added users %s to classroom %s", added, classroom_id)
        return classroom.admins_id, classroom.students_id

    def remove_members(self, classroom_id: str, user_ids: List[int]) -> Tuple[List[int], List[int]]:
        """Remove users from a classroom whatever their role in it.

        Removing a non-member is a no-op. Users that still point at this
        classroom are repointed to their latest remaining classroom, if any.

        Raises:
            ClassroomNotFoundError: If the classroom does not exist.
        """
        classroom = self.get_classroom(classroom_id)
        ids = _unique(user_ids)
        if ids:
            self.db.query(ClassroomMembershipModel).filter(
                ClassroomMembershipModel.classroom_id == classroom_id,
                ClassroomMembershipModel.user_id.in_(ids),
            ).delete(synchronize_session="fetch")
            self._repoint_users(classroom_id, ids)
        self._commit()
        self.db.refresh(classroom)
        logger.info("Removed users %s from classroom %s", ids, classroom_id)
        return classroom.admins_id, classroom.students_id

    def delete_classroom(self, classroom_id: str) -> List[str]:
        """Delete a classroom and everything scoped to it.

        Memberships are removed and member back-references repointed first,
        then lesson data and scores, then the classroom row; all in one
        transaction.

        Returns:
            Storage keys of lesson summary files that no longer have a
            record; the caller removes them from disk.

        Raises:
            ClassroomNotFoundError: If the classroom does not exist.
        """
        classroom = self.get_classroom(classroom_id)

        self.db.query(ClassroomMembershipModel).filter(
            ClassroomMembershipModel.classroom_id == classroom_id
        ).delete(synchronize_session="fetch")
        self._repoint_users(classroom_id)

        lesson_ids = [
            row.id
            for row in self.db.query(LessonModel.id).filter(
                LessonModel.classroom_id == classroom_id
            )
        ]
        file_keys = []
        if lesson_ids:
            file_keys = [
                row.file_key
                for row in self.db.query(LessonSummaryModel.file_key).filter(
                    LessonSummaryModel.lesson_id.in_(lesson_ids)
                )
            ]
            self.db.query(GradeModel).filter(GradeModel.lesson_id.in_(lesson_ids)).delete(
                synchronize_session="fetch"
            )
            self.db.query(LessonSummaryModel).filter(
                LessonSummaryModel.lesson_id.in_(lesson_ids)
            ).delete(synchronize_session="fetch")
            self.db.query(LessonModel).filter(LessonModel.id.in_(lesson_ids)).delete(
                synchronize_session="fetch"
            )
        self.db.query(LeaderboardEntryModel).filter(
            LeaderboardEntryModel.classroom_id == classroom_id
        ).delete(synchronize_session="fetch")

        self.db.query(ClassroomModel).filter(ClassroomModel.id == classroom.id).delete(
            synchronize_session="fetch"
        )
        self._commit()
        logger.info("Deleted classroom: %s", classroom_id)
        return file_keys

    def list_members(self, classroom_id: str) -> Tuple[List[UserModel], List[UserModel]]:
        """Return (admins, students) as user rows in membership order."""
        classroom = self.get_classroom(classroom_id)
        users = self._load_users([m.user_id for m in classroom.memberships])
        admins = [users[i] for i in classroom.admins_id if i in users]
        students = [users[i] for i in classroom.students_id if i in users]
        return admins, students

    def _load_users(self, user_ids: List[int]) -> Dict[int, UserModel]:
        if not user_ids:
            return {}
        rows = self.db.query(UserModel).filter(UserModel.id.in_(user_ids)).all()
        return {user.id: user for user in rows}

    def _repoint_users(self, classroom_id: str, user_ids: Optional[List[int]] = None) -> None:
        """Move ``classroom_id`` of users leaving a classroom to their latest
        remaining membership, or clear it."""
        query = self.db.query(UserModel).filter(UserModel.classroom_id == classroom_id)
        if user_ids is not None:
            query = query.filter(UserModel.id.in_(user_ids))
        for user in query.all():
            latest = (
                self.db.query(ClassroomMembershipModel)
                .filter(
                    ClassroomMembershipModel.user_id == user.id,
                    ClassroomMembershipModel.classroom_id != classroom_id,
                )
                .order_by(ClassroomMembershipModel.id.desc())
                .first()
            )
            user.classroom_id = latest.classroom_id if latest else None
        self.db.flush()

    def _detach_from_other_classroom(self, user: UserModel, classroom_id: str) -> None:
        previous = (
            self.db.query(ClassroomMembershipModel)
            .filter(
                ClassroomMembershipModel.user_id == user.id,
                ClassroomMembershipModel.classroom_id != classroom_id,
            )
            .all()
        )
        for membership in previous:
            logger.info(
                "Moving user %s from classroom %s to %s",
                user.id,
                membership.classroom_id,
                classroom_id,
            )
            self.db.delete(membership)
        if previous:
            self.db.flush()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            # Another request changed the same membership rows first
            self.db.rollback()
            logger.warning("Membership update conflict: %s", e)
            raise ConflictError("Classroom membership changed concurrently, please retry") from e
