"""Line item template schemas.

The wire format uses camelCase keys (``defaultQuantity``/``defaultAmount``);
Python code works with the snake_case attribute names.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LineItemTemplateBase(BaseModel):
    description: str
    default_quantity: Optional[float] = Field(default=None, alias="defaultQuantity")
    default_amount: Optional[float] = Field(default=None, alias="defaultAmount")
    category: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class LineItemTemplateCreate(LineItemTemplateBase):
    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("description must not be blank")
        return value


class LineItemTemplateUpdate(BaseModel):
    description: Optional[str] = None
    default_quantity: Optional[float] = Field(default=None, alias="defaultQuantity")
    default_amount: Optional[float] = Field(default=None, alias="defaultAmount")
    category: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("description must not be blank")
        return value


class LineItemTemplateRead(LineItemTemplateBase):
    """A template as the editor sees it. ``id`` is always server-assigned."""

    id: int

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, frozen=True)
