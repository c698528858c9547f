from rq import SimpleWorker, Queue
from filmcraft.core.redis import redis_client

listen = ['palette']

if __name__ == '__main__':
    queues = [Queue(name, connection=redis_client) for name in listen]
    worker = SimpleWorker(queues, connection=redis_client)
    print(f"[Worker] Listening on queues: {listen}")
    worker.work()
