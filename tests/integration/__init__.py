"""Integration tests for the client working against a Hexy API.

No mocks for the client itself - requests go through FastAPI routing,
form and multipart parsing, and validation in the fake backend.

Coverage:
    - Register, login and session restore
    - Conversation lifecycle and chat history
    - Text and image messages, including failure callbacks
    - Profile updates, avatar upload and account deletion
"""
