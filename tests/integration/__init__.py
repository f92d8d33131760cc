"""Integration tests for components working together as a system.

Coverage:
    - Session endpoints with real multipart uploads
    - Document preview URLs and their revocation
    - SSE chat streaming from upload to final chunk
    - A live Gemini round trip (when GEMINI_API_KEY is set)

Slower than unit tests but provides higher confidence.
"""
