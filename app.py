from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from routers.rooms import rooms_router
from schemas.messages import ClientMessage
from sessions import Session, SessionBroker
from constants import (
    CORS_ORIGINS, LOG_FILE, LOG_LEVEL,
    CONNECTED, JOIN_ROOM, LEAVE_ROOM, PING, PONG, WHITEBOARD_CHANGE,
)
import asyncio
from typing import Optional
from logging_config import get_logger, setup_logging

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)


async def pump_outbox(websocket: WebSocket, session: Session):
    """Background task writing a session's queued messages to its socket in order."""
    try:
        while True:
            message = await session.outbox.get()
            await websocket.send_text(message.model_dump_json())
    except asyncio.CancelledError:
        logger.debug(f"Writer task cancelled for session {session.session_id}")
        raise
    except Exception as e:
        # Reader side sees the broken socket and runs the cleanup
        logger.warning(f"Error sending to session {session.session_id}: {e}")


def dispatch(broker: SessionBroker, session: Session, raw: str):
    """Decode one client frame and apply it. Bad frames are logged and dropped."""
    try:
        message = ClientMessage.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Dropping malformed frame from {session.session_id}: {e.error_count()} error(s)")
        return

    if message.event == WHITEBOARD_CHANGE:
        broker.change(session, message.data)
    elif message.event in (JOIN_ROOM, LEAVE_ROOM):
        if not isinstance(message.data, str):
            logger.warning(f"Dropping {message.event} from {session.session_id}: room id must be a string")
            return
        if message.event == JOIN_ROOM:
            broker.join(session, message.data)
        else:
            broker.leave(session, message.data)
    elif message.event == PING:
        broker.relay.deliver(session.session_id, PONG)
    else:
        logger.warning(f"Dropping unknown event {message.event!r} from {session.session_id}")


def create_app(broker: Optional[SessionBroker] = None) -> FastAPI:
    app = FastAPI(title="Whiteboard session broker")
    app.state.broker = broker or SessionBroker()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(rooms_router)

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """One whiteboard participant. Frames are JSON {"event": ..., "data": ...}."""
        broker: SessionBroker = websocket.app.state.broker
        await websocket.accept()

        session = broker.connect()
        writer = asyncio.create_task(pump_outbox(websocket, session))
        broker.relay.deliver(session.session_id, CONNECTED, session.session_id)

        try:
            while True:
                raw = await websocket.receive_text()
                dispatch(broker, session, raw)
        except WebSocketDisconnect:
            logger.debug(f"WebSocket closed by client for session {session.session_id}")
        except Exception as e:
            logger.error(f"WebSocket error for session {session.session_id}: {e}", exc_info=True)
            try:
                await websocket.close(code=1011)
            except Exception as close_error:
                logger.debug(f"Error closing WebSocket: {close_error}")
        finally:
            # Cleanup on disconnect, whatever the cause
            broker.disconnect(session)
            writer.cancel()
            try:
                await writer
            except asyncio.CancelledError:
                pass

    logger.info("FastAPI application initialized")
    return app


app = create_app()
