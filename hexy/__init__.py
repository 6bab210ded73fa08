"""Hexy - client for the Hexy AI chat assistant API.

Combines httpx for HTTP, Pydantic for payload validation and
configuration, and python-dotenv for environment loading.

Components:
    - client: API operations, error normalization, response decoding
    - auth: Credential stores, token lifecycle, account flows
    - catalog: Model list normalization and fallback catalog
    - chat: Conversation state for chat front ends
    - models: Request/response schemas
"""

__version__ = "0.1.0"
