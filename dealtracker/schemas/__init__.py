from .user import UserResponse
from .business_unit import BusinessUnitCreate, BusinessUnitUpdate, BusinessUnitResponse
from .tag import TagCreate, TagUpdate, TagResponse, DealTagResponse
from .custom_field import CustomFieldCreate, CustomFieldUpdate, CustomFieldResponse
from .resource import ResourceCreate, ResourceResponse
from .comment import CommentCreate, CommentResponse, CommentWithUserResponse
from .deal import (
    DealCreate,
    DealUpdate,
    DealResponse,
    DealWithRelationsResponse,
    DealDetailResponse,
)
from .activity import ActivityLogResponse, ActivityFeedItem
from .dashboard import DashboardStats
from .ai import (
    GenerateSummaryRequest,
    GenerateSummaryResponse,
    MarketResearchRequest,
    MarketReport,
    MarketResearchResponse,
)

__all__ = [
    "UserResponse",
    "BusinessUnitCreate",
    "BusinessUnitUpdate",
    "BusinessUnitResponse",
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    "DealTagResponse",
    "CustomFieldCreate",
    "CustomFieldUpdate",
    "CustomFieldResponse",
    "ResourceCreate",
    "ResourceResponse",
    "CommentCreate",
    "CommentResponse",
    "CommentWithUserResponse",
    "DealCreate",
    "DealUpdate",
    "DealResponse",
    "DealWithRelationsResponse",
    "DealDetailResponse",
    "ActivityLogResponse",
    "ActivityFeedItem",
    "DashboardStats",
    "GenerateSummaryRequest",
    "GenerateSummaryResponse",
    "MarketResearchRequest",
    "MarketReport",
    "MarketResearchResponse",
]
