"""Chat Relay - minimal chat front-end over a hosted language model.

Combines FastAPI for the relay endpoint, NiceGUI for the chat page,
httpx and google-genai for provider calls, and Pydantic for validation.

Components:
    - api: Relay HTTP endpoints and error rendering
    - provider: HuggingFace and Gemini backends behind one interface
    - ui: Chat page, transcript controller and relay client
    - models: Request/response schemas shared by relay and client
"""

__version__ = "0.1.0"
