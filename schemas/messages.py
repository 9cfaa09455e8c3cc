from pydantic import BaseModel, ConfigDict
from typing import Any


class ClientMessage(BaseModel):
    """Frame sent by a client: {"event": "...", "data": ...}."""
    model_config = ConfigDict(extra="ignore")

    event: str
    data: Any = None

class ServerMessage(BaseModel):
    event: str
    data: Any = None
