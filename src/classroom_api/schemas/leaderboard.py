from datetime import datetime
from typing import List, Optional

from classroom_api.schemas.common import CamelModel


class SubmitScoreRequest(CamelModel):
    game_id: str
    value: int


class LeaderboardEntryInfo(CamelModel):
    id: str
    game_id: str
    user_id: int
    classroom_id: str
    value: int
    created_at: Optional[datetime] = None


class ScoreEntry(CamelModel):
    score: int
    user_id: int
    username: Optional[str] = None
    name: Optional[str] = None
    surname: Optional[str] = None
    game_id: str
    classroom_id: str
    created_at: Optional[datetime] = None


class Pagination(CamelModel):
    total: int
    page: int
    page_size: int
    offset: int


class LeaderboardPage(CamelModel):
    data: List[ScoreEntry]
    pagination: Pagination
