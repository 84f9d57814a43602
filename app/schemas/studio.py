from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from app.schemas.stream import StreamResponse

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class StudioCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    location: str | None = Field(default=None, max_length=100)
    description: str | None = None
    color_code: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    image_url: str | None = Field(default=None, max_length=500)
    is_active: bool = True


class StudioUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    location: str | None = Field(default=None, max_length=100)
    description: str | None = None
    color_code: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    image_url: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None

    @field_validator("name", "is_active")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class StudioResponse(BaseModel):
    id: str
    name: str
    location: str | None
    description: str | None
    color_code: str | None
    primary_color: str
    image_url: str | None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class StudioWithStreamsResponse(StudioResponse):
    streams: list[StreamResponse] = []
