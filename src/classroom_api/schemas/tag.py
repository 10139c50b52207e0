from pydantic import Field

from classroom_api.schemas.common import CamelModel


class TagRequest(CamelModel):
    name: str = Field(min_length=1)


class TagInfo(CamelModel):
    id: str
    name: str
