from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship

from filmcraft.db.base import Base

PHASES = ("ideation", "planning", "shooting", "completed")


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # ideation fields
    title = Column(String(255), nullable=False)
    type = Column(String(64), nullable=True)
    duration = Column(String(64), nullable=True)
    concept = Column(Text, nullable=True)
    key_message = Column(Text, nullable=True)
    unique_angle = Column(Text, nullable=True)
    target_audience = Column(Text, nullable=True)
    tone = Column(String(255), nullable=True)
    inspiration = Column(Text, nullable=True)

    phase = Column(String(32), nullable=False, default="ideation")

    # planning collections, always replaced wholesale
    story_structure = Column(JSON, default=list)
    locations = Column(JSON, default=list)
    resources = Column(JSON, default=dict)
    production_schedule = Column(JSON, default=list)

    # optional: full script text stored here
    script = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)

    owner = relationship("User", back_populates="projects")
    scenes = relationship("Scene", back_populates="project", cascade="all, delete-orphan")
    shots = relationship("Shot", back_populates="project", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="project", cascade="all, delete-orphan")
    collaborators = relationship("Collaborator", back_populates="project", cascade="all, delete-orphan")
