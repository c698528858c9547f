from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Float
from sqlalchemy.orm import relationship

from filmcraft.db.base import Base


class Shot(Base):
    __tablename__ = "shots"

    id = Column(Integer, primary_key=True, index=True)

    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False
    )

    # no foreign key: shots may outlive the scene row they point at
    scene_number = Column(Integer, nullable=False, default=1)

    title = Column(String(255), nullable=False)
    shot_type = Column(String(64), nullable=True, default="Medium Shot")
    camera_movement = Column(String(64), nullable=True, default="Static")
    description = Column(Text, nullable=True)
    duration = Column(String(64), nullable=True, default="30 seconds")
    priority = Column(String(16), nullable=False, default="Medium")
    status = Column(String(16), nullable=False, default="pending")
    notes = Column(Text, nullable=True)

    image_url = Column(String(1024), nullable=True)
    palette = Column(Text, nullable=True)  # JSON-encoded list[[r,g,b], ...]

    order_index = Column(Float, nullable=False, default=1)

    created_at = Column(DateTime, default=datetime.utcnow)

    project = relationship("Project", back_populates="shots")
