from typing import Literal

from pydantic import Field, model_validator

from dealtracker.schemas.base import CamelModel

CustomFieldType = Literal["text", "number", "enum"]


class CustomFieldBase(CamelModel):
    name: str = Field(min_length=1)
    type: CustomFieldType
    required: bool = False
    options: list[str] | None = None


class CustomFieldCreate(CustomFieldBase):
    @model_validator(mode="after")
    def check_options(self):
        if self.type == "enum":
            if not self.options:
                raise ValueError("enum fields require a non-empty options list")
        else:
            self.options = None
        return self


class CustomFieldUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    type: CustomFieldType | None = None
    required: bool | None = None
    options: list[str] | None = None


class CustomFieldResponse(CustomFieldBase):
    id: int
