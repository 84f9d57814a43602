from app.models.user import User, UserRole
from app.models.studio import Studio
from app.models.stream import Stream, StreamStatus
from app.models.permission import UserStudioPermission

__all__ = [
    "User", "UserRole", "Studio", "Stream", "StreamStatus", "UserStudioPermission",
]
