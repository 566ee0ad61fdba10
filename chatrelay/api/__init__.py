"""FastAPI endpoints for the chat relay.

Stateless HTTP routes with async request handling.

Endpoints:
    - POST /api/chat: Relay one message to the model provider
    - GET /health: Service liveness
    - anything else: 404 {"error": "Route not found"}
"""

from chatrelay.api.app import app, create_app

__all__ = ["app", "create_app"]
