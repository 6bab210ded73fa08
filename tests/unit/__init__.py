"""Unit tests for individual components in isolation.

Coverage:
    - client/: Error normalization, decoders, request construction
    - auth/: Credential stores, token lifecycle, account flows
    - catalog/: Model list normalization and fallback selection
    - chat/: Optimistic message handling and rollback

HTTP is served by httpx.MockTransport; collaborators are replaced with
unittest.mock where a real client adds nothing.
"""
