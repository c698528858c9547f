"""
WebSocket feeds for project changes.

``/realtime/projects/{id}`` forwards raw change events; clients re-fetch what
they show. ``/realtime/projects/{id}/chat`` sends the complete chat history on
connect and again after every change to the project's comments.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status
from redis.asyncio import Redis as AsyncRedis
from starlette.concurrency import run_in_threadpool

from filmcraft.api.dependencies import context_for_token, load_project
from filmcraft.api.routes.chat import load_messages, to_schema_message
from filmcraft.core.redis import get_async_redis
from filmcraft.db.session import SessionLocal
from filmcraft.services.realtime import parse_event, project_channel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/realtime", tags=["realtime"])


def _can_view(project_id: int, token: str) -> bool:
    db = SessionLocal()
    try:
        load_project(context_for_token(db, token), project_id)
        return True
    except HTTPException:
        return False
    finally:
        db.close()


def _chat_snapshot(project_id: int) -> dict:
    db = SessionLocal()
    try:
        messages = [to_schema_message(m).model_dump(mode="json") for m in load_messages(db, project_id)]
    finally:
        db.close()
    return {"type": "messages", "project_id": project_id, "messages": messages}


async def _forward(pubsub, on_event: Callable[[dict], Awaitable[None]]) -> None:
    async for message in pubsub.listen():
        event = parse_event(message)
        if event:
            await on_event(event)


async def _drain(websocket: WebSocket) -> None:
    # client messages are ignored; this only waits for the disconnect
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass


async def _stream(
    websocket: WebSocket,
    redis: AsyncRedis,
    project_id: int,
    on_event: Callable[[dict], Awaitable[None]],
    on_subscribed: Optional[Callable[[], Awaitable[None]]] = None,
) -> None:
    pubsub = redis.pubsub()
    await pubsub.subscribe(project_channel(project_id))
    if on_subscribed:
        await on_subscribed()

    listener = asyncio.create_task(_forward(pubsub, on_event))
    receiver = asyncio.create_task(_drain(websocket))
    try:
        done, _ = await asyncio.wait({listener, receiver}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (listener, receiver):
            task.cancel()
        await asyncio.gather(listener, receiver, return_exceptions=True)
        await pubsub.reset()

    if receiver in done:
        logger.debug(f"[Realtime] Client left project {project_id}")
        return

    # pub/sub feed ended or failed
    error = None if listener.cancelled() else listener.exception()
    logger.warning(f"[Realtime] Listener for project {project_id} stopped: {error}")
    await websocket.close(code=status.WS_1011_INTERNAL_ERROR)


@router.websocket("/projects/{project_id}")
async def project_changes(
    websocket: WebSocket,
    project_id: int,
    token: str = "",
    redis: AsyncRedis = Depends(get_async_redis),
):
    if not await run_in_threadpool(_can_view, project_id, token):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await websocket.accept()

    async def send_change(event: dict):
        await websocket.send_json({"type": "change", "project_id": project_id, **event})

    await _stream(websocket, redis, project_id, send_change)


@router.websocket("/projects/{project_id}/chat")
async def chat_feed(
    websocket: WebSocket,
    project_id: int,
    token: str = "",
    redis: AsyncRedis = Depends(get_async_redis),
):
    if not await run_in_threadpool(_can_view, project_id, token):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await websocket.accept()

    async def send_snapshot():
        await websocket.send_json(await run_in_threadpool(_chat_snapshot, project_id))

    async def reload_on_change(event: dict):
        if event.get("table") == "comments":
            await send_snapshot()

    await _stream(websocket, redis, project_id, reload_on_change, on_subscribed=send_snapshot)
