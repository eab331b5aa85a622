from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends
import logging

from playdeck.api.deps import (
    get_player_executor_ws,
    get_ws_manager_ws,
)
from playdeck.models.events import status_event

log = logging.getLogger("ws")

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    executor=Depends(get_player_executor_ws),
    ws_manager=Depends(get_ws_manager_ws),
):
    await ws_manager.connect(websocket)

    try:
        # current snapshot first, then whatever the broadcaster pushes
        await websocket.send_json(status_event(executor.status()))

        while True:
            msg = await websocket.receive_json()
            if msg.get("type") == "status_request":
                await websocket.send_json(status_event(executor.status()))
                continue

            log.debug("ws_unknown_msg", extra={"msg": msg})

    except WebSocketDisconnect:
        pass
    except Exception as e:
        log.warning("ws_connection_closed", extra={"error": str(e)})
    finally:
        await ws_manager.disconnect(websocket)
