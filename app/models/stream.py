import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Text, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class StreamStatus(str, enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    ERROR = "error"


class Stream(Base):
    """A live video source inside a studio. Deleting only clears is_active."""
    __tablename__ = "streams"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    studio_id = Column(String(36), ForeignKey("studios.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    stream_url = Column(Text, nullable=False)  # WHEP/WebRTC playback URL
    resolution = Column(String(20), nullable=True, default="1080p")
    fps = Column(Integer, nullable=True, default=30)
    status = Column(String(20), nullable=False, default=StreamStatus.OFFLINE.value)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    studio = relationship("Studio", back_populates="streams")
