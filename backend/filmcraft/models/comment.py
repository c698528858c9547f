from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship

from filmcraft.db.base import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)
    # project chat messages have no shot
    shot_id = Column(Integer, ForeignKey("shots.id", ondelete="CASCADE"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    content = Column(Text, nullable=False)
    message_type = Column(String(32), nullable=False, default="general")

    # author_email, timestamp, edited, edited_at
    meta = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    project = relationship("Project", back_populates="comments")


class ChatReadStatus(Base):
    __tablename__ = "chat_read_status"

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    last_read_message_id = Column(Integer, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
