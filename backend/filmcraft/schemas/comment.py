from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, Literal

MessageType = Literal["general", "announcement", "question"]


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1)
    message_type: MessageType = "general"


class MessageUpdate(BaseModel):
    content: str = Field(..., min_length=1)


class Message(BaseModel):
    id: int
    project_id: int
    shot_id: Optional[int] = None
    user_id: int
    content: str
    message_type: str
    metadata: Dict[str, Any] = {}
    created_at: datetime
    color: str


class UnreadCount(BaseModel):
    project_id: int
    last_read_message_id: Optional[int] = None
    unread: int
