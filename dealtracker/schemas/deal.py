from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from dealtracker.models.deal import DealStage
from dealtracker.schemas.base import CamelModel
from dealtracker.schemas.business_unit import BusinessUnitResponse
from dealtracker.schemas.comment import CommentWithUserResponse
from dealtracker.schemas.resource import ResourceResponse
from dealtracker.schemas.tag import TagResponse
from dealtracker.schemas.user import UserResponse


class DealBase(CamelModel):
    company: str = Field(min_length=1)
    website: str | None = None
    internal_contact: str | None = None
    business_unit_id: int | None = None
    deal_type: str = Field(min_length=1)
    investment_size: int | None = Field(default=None, ge=0)
    use_case: str | None = None
    lead_owner_id: int | None = None
    stage: str = DealStage.FOLLOWING
    notes: str | None = None
    custom_field_values: dict[str, Any] | None = None


class DealCreate(DealBase):
    tag_ids: list[int] = Field(default_factory=list)
    user_id: int | None = None


class DealUpdate(CamelModel):
    company: str | None = Field(default=None, min_length=1)
    website: str | None = None
    internal_contact: str | None = None
    business_unit_id: int | None = None
    deal_type: str | None = Field(default=None, min_length=1)
    investment_size: int | None = Field(default=None, ge=0)
    use_case: str | None = None
    lead_owner_id: int | None = None
    stage: str | None = None
    notes: str | None = None
    custom_field_values: dict[str, Any] | None = None
    # Full replacement of the deal's tag set when present
    tag_ids: list[int] | None = None
    user_id: int | None = None

    @field_validator("company", "deal_type", "stage")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class DealResponse(DealBase):
    id: int
    ai_summary: str | None = None
    ai_market_report_link: str | None = None
    last_updated: datetime
    created_at: datetime


class DealWithRelationsResponse(DealResponse):
    business_unit: BusinessUnitResponse | None = None
    lead_owner: UserResponse | None = None
    tags: list[TagResponse] = Field(default_factory=list)
    resources: list[ResourceResponse] = Field(default_factory=list)


class DealDetailResponse(DealWithRelationsResponse):
    comments: list[CommentWithUserResponse] = Field(default_factory=list)
