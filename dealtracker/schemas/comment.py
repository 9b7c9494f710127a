from datetime import datetime
from typing import Annotated

from pydantic import StringConstraints

from dealtracker.schemas.base import CamelModel
from dealtracker.schemas.user import UserResponse


class CommentCreate(CamelModel):
    """Schema for creating a comment - deal_id comes from the path"""
    user_id: int
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CommentResponse(CamelModel):
    id: int
    deal_id: int
    user_id: int
    content: str
    created_at: datetime


class CommentWithUserResponse(CommentResponse):
    user: UserResponse
