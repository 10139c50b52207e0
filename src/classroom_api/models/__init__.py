from .base import Base
from .user import Role, UserModel
from .classroom import ClassroomModel, ClassroomMembershipModel
from .parent_child import ParentChildModel
from .game import GameModel
from .tag import TagModel
from .lesson import LessonModel, LessonSummaryModel
from .grade import GradeModel
from .leaderboard import LeaderboardEntryModel
from .teacher_meta import TeacherMetaModel

__all__ = [
    "Base",
    "Role",
    "UserModel",
    "ClassroomModel",
    "ClassroomMembershipModel",
    "ParentChildModel",
    "GameModel",
    "TagModel",
    "LessonModel",
    "LessonSummaryModel",
    "GradeModel",
    "LeaderboardEntryModel",
    "TeacherMetaModel",
]
