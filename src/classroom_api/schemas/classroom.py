from typing import List

from pydantic import Field

from classroom_api.schemas.common import CamelModel
from classroom_api.schemas.user import UserPublic


class CreateClassroomRequest(CamelModel):
    name: str = Field(min_length=1)


class MembersRequest(CamelModel):
    user_ids: List[int] = Field(min_length=1)


class ClassroomInfo(CamelModel):
    id: str
    name: str
    admins_id: List[int]
    students_id: List[int]


class MembershipResponse(CamelModel):
    message: str
    admins_id: List[int]
    students_id: List[int]


class ClassroomDetails(ClassroomInfo):
    admins: List[UserPublic]
    students: List[UserPublic]
