from datetime import datetime
from typing import List, Optional

from pydantic import Field

from classroom_api.schemas.common import CamelModel


class CreateLessonRequest(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    classroom_id: str = Field(min_length=1)
    game_ids: List[str] = Field(default_factory=list)


class UpdateLessonRequest(CamelModel):
    """Partial update; omitted fields keep their current value."""

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    game_ids: Optional[List[str]] = None


class LessonInfo(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    classroom_id: str
    game_ids: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SummaryUploadResponse(CamelModel):
    message: str
    file_name: str
