from typing import List, Optional

MESSAGE_TYPES = ("general", "announcement", "question")


def filter_messages(messages: List, message_type: str = "all", query: str = "") -> List:
    """Client-side style filtering over an already loaded message list."""
    filtered = list(messages)

    if message_type != "all":
        filtered = [m for m in filtered if (m.message_type or "general") == message_type]

    needle = query.strip().lower()
    if needle:
        filtered = [
            m for m in filtered
            if needle in (m.content or "").lower()
            or needle in ((m.meta or {}).get("author_email") or "").lower()
        ]
    return filtered


def unread_count(messages: List, last_read_message_id: Optional[int], user_id: int) -> int:
    """
    Messages after the last read one that someone else wrote. When the last
    read message is unknown (never read, or deleted since) everything counts.
    """
    messages = list(messages)
    ids = [m.id for m in messages]
    if last_read_message_id is not None and last_read_message_id in ids:
        messages = messages[ids.index(last_read_message_id) + 1:]
    return len([m for m in messages if m.user_id != user_id])
