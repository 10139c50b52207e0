from pydantic import Field

from classroom_api.schemas.common import CamelModel


class GameRequest(CamelModel):
    name: str = Field(min_length=1)


class GameInfo(CamelModel):
    id: str
    name: str
