"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat transcript display with auto-scroll to the newest message
    - Single-flight message sending through the relay
    - Connection status badge and retry
    - Dark/light theme toggle

State lives in ChatSession; the page only renders it. All model calls go
through the relay API.
"""
