"""
Per-project change notifications over Redis pub/sub.

Writers publish a small "something changed" event after they commit;
subscribers are expected to re-read whatever they display. Events carry
no row data.
"""

import json
import logging
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


def project_channel(project_id: int) -> str:
    return f"project:{project_id}:changes"


def change_event(table: str, event: str, row_id: Optional[int] = None) -> dict:
    return {"table": table, "event": event, "id": row_id}


class ChangeNotifier:

    def __init__(self, redis: Redis):
        self.redis = redis

    def publish(self, project_id: int, table: str, event: str, row_id: Optional[int] = None) -> None:
        payload = json.dumps(change_event(table, event, row_id))
        try:
            self.redis.publish(project_channel(project_id), payload)
        except RedisError as e:
            # the write is already committed; listeners catch up on next reload
            logger.warning(f"[Realtime] Failed to publish {table}/{event} for project {project_id}: {e}")


def parse_event(message: dict) -> Optional[dict]:
    if message.get("type") != "message":
        return None
    data = message.get("data")
    if isinstance(data, bytes):
        data = data.decode()
    try:
        return json.loads(data)
    except (TypeError, ValueError):
        return None
