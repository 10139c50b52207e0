from typing import List, Optional

from pydantic import Field

from classroom_api.schemas.common import CamelModel


class TeacherMetaRequest(CamelModel):
    tags_id: List[str] = Field(default_factory=list)
    about_teacher: Optional[str] = None
    can_help_with: Optional[str] = None
    resume: Optional[str] = None


class TeacherMetaUpdateRequest(CamelModel):
    """Partial update; omitted fields keep their current value."""

    tags_id: Optional[List[str]] = None
    about_teacher: Optional[str] = None
    can_help_with: Optional[str] = None
    resume: Optional[str] = None


class TeacherMetaInfo(CamelModel):
    id: str
    user_id: int
    tags_id: List[str]
    about_teacher: Optional[str] = None
    can_help_with: Optional[str] = None
    resume: Optional[str] = None


class TeacherSearchResult(CamelModel):
    teacher_id: int
    teacher_name: Optional[str] = None
    teacher_surname: Optional[str] = None
    about_teacher: Optional[str] = None
    can_help_with: Optional[str] = None
    tags_id: List[str]
