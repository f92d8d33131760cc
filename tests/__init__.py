"""Test package for Axiom Reader.

Unit tests cover isolated logic; integration tests drive the FastAPI app
end to end.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP workflow tests

PDFs are built in memory by conftest.make_pdf. The Gemini model is
replaced by a scripted Agno stub unless a test is marked requires_api_key.
Leverages pytest with pytest-check for soft assertions.
"""
