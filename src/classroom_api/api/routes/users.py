from typing import List

from fastapi import APIRouter

from classroom_api.core.dependencies import UserManagerDep
from classroom_api.core.permissions import ClassroomMemberDep, CurrentUserDep, TeacherDep
from classroom_api.schemas.user import UserPublic

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserPublic], summary="List all users")
def list_users(current_user: TeacherDep, user_manager: UserManagerDep) -> List[UserPublic]:
    return [UserPublic.model_validate(user) for user in user_manager.list_users()]


@router.get(
    "/classroom/{classroom_id}",
    response_model=List[UserPublic],
    summary="List users of a classroom",
)
def list_classroom_users(
    classroom: ClassroomMemberDep, user_manager: UserManagerDep
) -> List[UserPublic]:
    return [
        UserPublic.model_validate(user)
        for user in user_manager.list_classroom_users(classroom.id)
    ]


@router.get("/{user_id}", response_model=UserPublic, summary="Get a user")
def get_user(
    user_id: int, current_user: CurrentUserDep, user_manager: UserManagerDep
) -> UserPublic:
    return UserPublic.model_validate(user_manager.get_user(user_id))
