from rq import Queue

from filmcraft.core.redis import redis_client

palette_queue = Queue("palette", connection=redis_client)


def get_palette_queue() -> Queue:
    return palette_queue
