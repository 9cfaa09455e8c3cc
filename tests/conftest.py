import pytest
from fastapi.testclient import TestClient

from app import create_app
from sessions import SessionBroker


def drain(session):
    """Everything queued for a session so far, as (event, data) pairs."""
    messages = []
    while not session.outbox.empty():
        message = session.outbox.get_nowait()
        messages.append((message.event, message.data))
    return messages


@pytest.fixture
def broker():
    return SessionBroker()


@pytest.fixture
def client(broker):
    # Entering the client shares one event loop between all websocket sessions
    with TestClient(create_app(broker)) as test_client:
        yield test_client


def make_board(label):
    return {"version": "5.3.0", "objects": [{"type": "path", "id": label}], "background": "#ffffff"}
