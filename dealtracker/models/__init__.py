from .user import User
from .business_unit import BusinessUnit
from .tag import Tag
from .custom_field import CustomField
from .deal import Deal
from .deal_tag import DealTag
from .resource import Resource
from .comment import Comment
from .activity_log import ActivityLog

__all__ = [
    "User",
    "BusinessUnit",
    "Tag",
    "CustomField",
    "Deal",
    "DealTag",
    "Resource",
    "Comment",
    "ActivityLog",
]
