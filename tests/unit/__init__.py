"""Unit tests for individual components in isolation.

Coverage:
    - provider/: Configuration, error mapping, HuggingFace and Gemini backends
    - ui/: Relay client classification, transcript controller, formatting

Uses mocks for external services. Leverages pytest-check for multiple
assertions per test.
"""
