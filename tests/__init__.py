"""Test package for the Hexy client.

Structure:
    - unit/: Isolated logic (errors, decoders, catalog, stores, client requests)
    - integration/: Client workflows against an in-process fake Hexy API

Integration tests use a FastAPI fake served through ASGITransport, so no
network access or credentials are needed. Uses pytest with pytest-check for
soft assertions.
"""
