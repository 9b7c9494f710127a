from pydantic import Field

from dealtracker.schemas.base import CamelModel


class TagBase(CamelModel):
    name: str = Field(min_length=1)


class TagCreate(TagBase):
    pass


class TagUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)


class TagResponse(TagBase):
    id: int


class DealTagResponse(CamelModel):
    id: int
    deal_id: int
    tag_id: int
