"""Axiom Reader - grounded conversation with a single uploaded document.

Combines FastAPI for HTTP streaming, Agno with Gemini for extraction and
chat, NiceGUI for the interface, and Pydantic for data validation.

Components:
    - agent: Session lifecycle, axiom extraction, streaming chat
    - api: HTTP endpoints and streaming responses
    - parsing: PDF validation and response normalization
    - ui: Web interface and its view controller
    - models: Shared schemas
"""

__version__ = "0.1.0"
