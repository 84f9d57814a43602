from datetime import datetime
from pydantic import BaseModel
from app.schemas.studio import StudioResponse


class PermissionGrant(BaseModel):
    """Body for admin grant. Re-granting the same (user, studio) overwrites the flags."""
    user_id: str
    studio_id: str
    can_view: bool = True
    can_control: bool = False


class PermissionResponse(BaseModel):
    id: str
    user_id: str
    studio_id: str
    can_view: bool
    can_control: bool
    created_at: datetime

    class Config:
        from_attributes = True


class PermissionWithStudioResponse(PermissionResponse):
    studio: StudioResponse
