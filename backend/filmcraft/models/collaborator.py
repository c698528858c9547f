from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from filmcraft.db.base import Base


class Collaborator(Base):
    __tablename__ = "collaborators"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)

    email = Column(String(320), nullable=False, index=True)
    role = Column(String(16), nullable=False, default="viewer")     # viewer, editor, admin
    film_role = Column(String(32), nullable=False, default="crew")  # director, gaffer, ...
    permissions = Column(JSON, default=dict)                        # {"view", "edit", "admin"}

    invited_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    # set once the invitee signs up with the invited email
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    project = relationship("Project", back_populates="collaborators")
