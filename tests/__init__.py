"""Test package for Chat Relay.

Unit tests cover isolated logic; integration tests drive the real FastAPI
app through httpx's ASGITransport.

Structure:
    - unit/: Configuration, providers, error mapping, client and session
    - integration/: Relay endpoints and client-to-relay round trips

Provider APIs are never called; upstream behaviour is simulated with
httpx.MockTransport or mocked SDK clients. Leverages pytest with
pytest-check for soft assertions.
"""
