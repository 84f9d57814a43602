from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from app.models.stream import StreamStatus


class StreamCreate(BaseModel):
    studio_id: str
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    stream_url: str = Field(min_length=1)
    resolution: str | None = "1080p"
    fps: int | None = Field(default=30, ge=1, le=240)
    status: StreamStatus = StreamStatus.OFFLINE
    is_active: bool = True


class StreamUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""
    studio_id: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    stream_url: str | None = Field(default=None, min_length=1)
    resolution: str | None = None
    fps: int | None = Field(default=None, ge=1, le=240)
    status: StreamStatus | None = None
    is_active: bool | None = None

    @field_validator("studio_id", "name", "stream_url", "status", "is_active")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class StreamStatusUpdate(BaseModel):
    status: StreamStatus


class StreamResponse(BaseModel):
    id: str
    studio_id: str
    name: str
    description: str | None
    stream_url: str
    resolution: str | None
    fps: int | None
    status: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
