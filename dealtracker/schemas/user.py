from datetime import datetime

from dealtracker.schemas.base import CamelModel


class UserResponse(CamelModel):
    # password is never serialized
    id: int
    username: str
    full_name: str
    email: str
    role: str
    avatar_url: str | None = None
    created_at: datetime
