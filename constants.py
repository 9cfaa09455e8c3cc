import os

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3001))
RELOAD = os.getenv("RELOAD", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# Wire event names
JOIN_ROOM = "join-room"
LEAVE_ROOM = "leave-room"
WHITEBOARD_CHANGE = "whiteboard-change"
WHITEBOARD_STATE = "whiteboard-state"
USER_JOINED = "user-joined"
USER_LEFT = "user-left"
CONNECTED = "connected"
PING = "ping"
PONG = "pong"
