# routers/live.py
"""
WS /live/{resource}?token=<access token>

Pushes the caller's tenant-scoped snapshot of a resource, then a fresh
one after every change in the tables behind it. Sending the text
"refresh" forces a re-fetch.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, status

from core.live_resource import LiveResource
from core.logging_config import logger
from core.permission_helpers import has_permission
from dependencies.auth import authenticate_token
from services.registry import RESOURCES, build_live_resource


router = APIRouter(
    prefix="/live",
    tags=["Live"],
)


async def _send_snapshots(websocket: WebSocket, queue: asyncio.Queue):
    while True:
        snapshot = await queue.get()
        await websocket.send_json(snapshot.model_dump(mode="json"))


async def _flush(websocket: WebSocket, queue: asyncio.Queue):
    while not queue.empty():
        snapshot = queue.get_nowait()
        await websocket.send_json(snapshot.model_dump(mode="json"))


async def _receive_commands(websocket: WebSocket, live: LiveResource):
    while True:
        message = await websocket.receive_text()
        if message.strip().lower() == "refresh":
            await live.refresh()


async def _serve(websocket: WebSocket, live: LiveResource, queue: asyncio.Queue):
    """Run until the client disconnects or sending fails."""
    tasks = {
        asyncio.create_task(_send_snapshots(websocket, queue)),
        asyncio.create_task(_receive_commands(websocket, live)),
    }
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    for task in done:
        task.result()


@router.websocket("/{resource}")
async def live_resource(websocket: WebSocket, resource: str, token: Optional[str] = None):
    definition = RESOURCES.get(resource)
    if definition is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=f"Unknown resource '{resource}'")
        return

    try:
        current_user = await asyncio.to_thread(authenticate_token, token)
    except HTTPException as e:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=str(e.detail))
        return

    if not has_permission(current_user, definition.permission):
        await websocket.close(
            code=status.WS_1008_POLICY_VIOLATION,
            reason=f"Insufficient permissions: '{definition.permission}' required",
        )
        return

    await websocket.accept()
    logger.info(f"Live {resource} opened for {current_user.email}")

    queue: asyncio.Queue = asyncio.Queue()
    live = build_live_resource(resource, current_user.tenant())
    live.add_listener(queue.put_nowait)

    try:
        await live.start()

        if not current_user.society_id:
            await _flush(websocket, queue)
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=live.snapshot.error)
            return

        await _serve(websocket, live, queue)

    except WebSocketDisconnect:
        logger.info(f"Live {resource} closed by {current_user.email}")
    except Exception as e:
        logger.error(f"Live {resource} failed for {current_user.email}: {e}", exc_info=True)
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
    finally:
        await live.stop()
