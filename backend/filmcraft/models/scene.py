from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship

from filmcraft.db.base import Base


class Scene(Base):
    __tablename__ = "scenes"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True)

    scene_number = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    content = Column(Text, nullable=True)

    location = Column(String(255), nullable=True)
    location_type = Column(String(64), nullable=True, default="Indoor")

    checklist = Column(JSON, default=dict)   # {"lighting_setup": true, ...}
    resources = Column(JSON, default=dict)   # {"Equipment": ["Tripod"], ...}

    created_at = Column(DateTime, default=datetime.utcnow)

    project = relationship("Project", back_populates="scenes")
