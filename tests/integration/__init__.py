"""Integration tests for components working together as a system.

Coverage:
    - Relay endpoints with real HTTP requests through ASGITransport
    - Chat session and relay client talking to the real app

Only the model provider is replaced, so no API keys are required.
"""
