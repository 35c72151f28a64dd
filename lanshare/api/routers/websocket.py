"""WebSocket endpoint pushing content events to connected devices."""
import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from lanshare.websocket.observer import WebSocketObserver

logger = logging.getLogger(__name__)

router = APIRouter()


async def _discard_incoming(websocket: WebSocket) -> None:
    # clients only listen; anything they send is ignored
    while True:
        await websocket.receive_text()


@router.websocket("/ws")
async def content_socket(websocket: WebSocket):
    hub = websocket.app.state.container.hub
    observer = WebSocketObserver(websocket)
    receiver = None
    try:
        # registering first queues the snapshot before the client sees the handshake complete
        hub.connect(observer)
        await websocket.accept()
        pump = observer.start()
        receiver = asyncio.create_task(_discard_incoming(websocket))
        done, _ = await asyncio.wait({pump, receiver}, return_when=asyncio.FIRST_COMPLETED)
        if receiver in done:
            receiver.result()
        else:
            logger.warning("Observer %s stopped accepting messages, dropping it", observer.observer_id)
    except WebSocketDisconnect:
        logger.info("Observer %s closed the connection", observer.observer_id)
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("Observer %s websocket error: %s", observer.observer_id, exc)
    finally:
        if receiver is not None and not receiver.done():
            receiver.cancel()
        hub.disconnect(observer.observer_id)
        await observer.close()
