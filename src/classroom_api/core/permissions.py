"""Request authorization.

Every protected route declares what it needs by depending on one of the
guards below:

- ``CurrentUserDep``: a valid bearer token for a user that still exists.
- ``requires(*roles)`` / ``TeacherDep`` / ``ParentDep``: the live role of
  that user, read from the store, is one of ``roles``.
- ``StudentAccessDep``: the caller is the student, a teacher, or a parent
  linked to the student.
- ``ClassroomAdminDep`` / ``ClassroomMemberDep``: the caller administers, or
  belongs to, the classroom in the path; a missing classroom is a 404.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from classroom_api.core.dependencies import (
    ClassroomManagerDep,
    ParentChildManagerDep,
    UserManagerDep,
)
from classroom_api.core.exceptions import AuthenticationError, AuthorizationError
from classroom_api.core.security import decode_access_token
from classroom_api.models.classroom import ClassroomModel
from classroom_api.models.user import Role, UserModel
from classroom_api.utils.classroom_manager import ClassroomManager
from classroom_api.utils.parent_child_manager import ParentChildManager

# HTTP Bearer token security; missing headers are reported by get_current_user
security = HTTPBearer(auto_error=False)

_ROLE_NAMES = {
    Role.STUDENT: "students",
    Role.PARENT: "parents",
    Role.TEACHER: "teachers",
}


def get_current_user(
    user_manager: UserManagerDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserModel:
    """Authenticate the request.

    Args:
        user_manager: Injected UserManager instance.
        credentials: Bearer credentials from the Authorization header.

    Returns:
        The live UserModel of the token's subject.

    Raises:
        AuthenticationError: If the token is absent or invalid, or the user
            no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")
    claims = decode_access_token(credentials.credentials)
    user = user_manager.get_user_by_id(claims.user_id)
    if user is None:
        raise AuthenticationError("Invalid token")
    return user


CurrentUserDep = Annotated[UserModel, Depends(get_current_user)]


def requires(*roles: Role):
    """Build a dependency that admits only users holding one of ``roles``."""
    allowed = frozenset(roles)
    names = " or ".join(_ROLE_NAMES[role] for role in roles)

    def role_gate(current_user: CurrentUserDep) -> UserModel:
        if current_user.role_id not in allowed:
            raise AuthorizationError(f"Only {names} can perform this action")
        return current_user

    return role_gate


TeacherDep = Annotated[UserModel, Depends(requires(Role.TEACHER))]
ParentDep = Annotated[UserModel, Depends(requires(Role.PARENT))]


def can_access_student(
    user: UserModel, student_id: int, parent_child_manager: ParentChildManager
) -> bool:
    """Ownership-or-guardianship check for data scoped to one student."""
    if user.id == student_id or user.role_id == Role.TEACHER:
        return True
    if user.role_id == Role.PARENT:
        return parent_child_manager.is_guardian(user.id, student_id)
    return False


def require_student_access(
    student_id: int,
    current_user: CurrentUserDep,
    parent_child_manager: ParentChildManagerDep,
) -> UserModel:
    if not can_access_student(current_user, student_id, parent_child_manager):
        raise AuthorizationError("Not authorized to access this student's data")
    return current_user


StudentAccessDep = Annotated[UserModel, Depends(require_student_access)]


def ensure_classroom_admin(
    classroom_manager: ClassroomManager, classroom_id: str, user: UserModel
) -> ClassroomModel:
    """Return the classroom if ``user`` administers it.

    Raises:
        ClassroomNotFoundError: If the classroom does not exist.
        AuthorizationError: If the user is not one of its admins.
    """
    classroom = classroom_manager.get_classroom(classroom_id)
    if not classroom_manager.is_admin(classroom_id, user.id):
        raise AuthorizationError("Only classroom admins can perform this action")
    return classroom


def ensure_classroom_member(
    classroom_manager: ClassroomManager, classroom_id: str, user: UserModel
) -> ClassroomModel:
    """Return the classroom if ``user`` is one of its admins or students."""
    classroom = classroom_manager.get_classroom(classroom_id)
    if not classroom_manager.is_member(classroom_id, user.id):
        raise AuthorizationError("You don't have access to this classroom")
    return classroom


def require_classroom_admin(
    classroom_id: str,
    current_user: TeacherDep,
    classroom_manager: ClassroomManagerDep,
) -> ClassroomModel:
    return ensure_classroom_admin(classroom_manager, classroom_id, current_user)


def require_classroom_member(
    classroom_id: str,
    current_user: CurrentUserDep,
    classroom_manager: ClassroomManagerDep,
) -> ClassroomModel:
    return ensure_classroom_member(classroom_manager, classroom_id, current_user)


ClassroomAdminDep = Annotated[ClassroomModel, Depends(require_classroom_admin)]
ClassroomMemberDep = Annotated[ClassroomModel, Depends(require_classroom_member)]
