"""FastAPI endpoints for Axiom Reader.

HTTP and streaming routes with RESTful API design and async request handling.
Supports Server-Sent Events for real-time chat streaming.

Endpoints:
    - GET /health: Service health status
    - POST /sessions: Upload a PDF and extract its axioms
    - DELETE /sessions/{id}: Reset a session
    - POST /chat/stream: Stream an answer about the session's document
    - GET /documents/{token}: Preview an uploaded PDF
"""

from axiom_reader.api.app import app, create_app

__all__ = ["app", "create_app"]
