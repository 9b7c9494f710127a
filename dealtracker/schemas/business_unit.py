from pydantic import Field

from dealtracker.schemas.base import CamelModel


class BusinessUnitBase(CamelModel):
    name: str = Field(min_length=1)
    color: str


class BusinessUnitCreate(BusinessUnitBase):
    pass


class BusinessUnitUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    color: str | None = None


class BusinessUnitResponse(BusinessUnitBase):
    id: int
