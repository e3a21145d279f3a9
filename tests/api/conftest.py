"""
Pytest configuration and shared fixtures for API tests.

Provides TestClient-backed apps over an in-memory store, and a real uvicorn
server for integration tests.
"""

import socket
import threading
import time

import pytest
import requests
import uvicorn
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def make_client(test_engine, make_settings):
    """Factory for TestClients over the shared in-memory engine.

    Lifespan runs on enter, so tables are ensured exactly as in production.
    Server exceptions are turned into responses so 500 envelopes are testable.
    """
    from sql_gateway.api.main import create_app

    clients = []

    def _make(**settings_overrides):
        app = create_app(make_settings(**settings_overrides), engine=test_engine)
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture(scope="function")
def client(make_client):
    """TestClient for the full route table (raw SQL + patients, CORS on)."""
    return make_client()


@pytest.fixture
def real_server(tmp_path, make_settings):
    """Start real uvicorn server for integration tests.

    Uses a file-backed SQLite database so the app provisions its own engine.
    Uses dynamic port allocation to avoid conflicts.
    Waits for server to be ready before yielding.
    """
    from sql_gateway.api.main import create_app

    db_path = tmp_path / "gateway.db"
    app = create_app(make_settings(database_url=f"sqlite:///{db_path}"))

    # Find available port
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()

    # Configure server
    config = uvicorn.Config(app, host="127.0.0.1", port=port, log_level="error")
    server = uvicorn.Server(config)

    # Start server in background thread
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    # Wait for server to be ready (timeout after 5s)
    base_url = f"http://127.0.0.1:{port}"
    for _ in range(50):
        try:
            requests.get(f"{base_url}/", timeout=0.1)
            break
        except requests.RequestException:
            time.sleep(0.1)
    else:
        raise RuntimeError("Server failed to start within 5 seconds")

    yield base_url

    # Cleanup
    server.should_exit = True
    thread.join(timeout=2)
