import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base


class UserStudioPermission(Base):
    """View/control grant of one user on one studio. One row per (user, studio)."""
    __tablename__ = "user_studio_permissions"
    __table_args__ = (
        UniqueConstraint("user_id", "studio_id", name="uq_user_studio_permission"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    studio_id = Column(String(36), ForeignKey("studios.id"), nullable=False, index=True)
    can_view = Column(Boolean, nullable=False, default=True)
    can_control = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    user = relationship("User", back_populates="permissions")
    studio = relationship("Studio", back_populates="permissions")
