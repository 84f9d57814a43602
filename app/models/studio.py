import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from app.database import Base

DEFAULT_PRIMARY_COLOR = "#4A5568"


class Studio(Base):
    __tablename__ = "studios"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    location = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    color_code = Column(String(7), nullable=True)  # hex, e.g. "#28666E"
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    streams = relationship("Stream", back_populates="studio", order_by="Stream.name")
    permissions = relationship("UserStudioPermission", back_populates="studio")

    @property
    def primary_color(self) -> str:
        return self.color_code or DEFAULT_PRIMARY_COLOR
