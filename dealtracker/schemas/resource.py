from datetime import datetime
from typing import Literal

from pydantic import Field

from dealtracker.schemas.base import CamelModel


class ResourceBase(CamelModel):
    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    type: Literal["file", "link"]


class ResourceCreate(ResourceBase):
    """Schema for creating a resource - deal_id comes from the path"""
    user_id: int | None = None


class ResourceResponse(ResourceBase):
    id: int
    deal_id: int
    created_at: datetime
