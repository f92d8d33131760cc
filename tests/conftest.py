"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - sample_pdf_bytes: A small, valid PDF built in memory
    - sample_document: The same PDF captured as a Document
    - agno: Scripted stand-in for the Agno agent and Gemini model
    - manager: SessionManager with a test API key, wired to the stub
    - async_client: HTTPX client for API testing

The Agno classes are patched in the session manager module, so no test
here talks to the network.
"""

import asyncio
import json
from collections.abc import AsyncGenerator, Iterator
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from axiom_reader.agent.config import SessionConfig
from axiom_reader.agent.session_manager import SessionManager
from axiom_reader.api.app import create_app
from axiom_reader.api.documents import DocumentUrlRegistry, get_document_registry
from axiom_reader.api.registry import SessionRegistry, get_session_registry
from axiom_reader.models.schemas import Document
from axiom_reader.parsing.pdf_parser import load_document

SAMPLE_AXIOMS = [
    {"axiom": f"Pillar {i}", "definition": f"Explanation of pillar {i}."} for i in range(1, 7)
]


def make_pdf(text: str = "") -> bytes:
    """Build a one-page PDF, optionally with a line of Helvetica text."""
    content = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


class FakeAgent:
    """Stands in for agno.agent.Agent; behaviour comes from its AgnoStub."""

    def __init__(self, stub: "AgnoStub", **kwargs: Any) -> None:
        self.stub = stub
        self.kwargs = kwargs
        self.messages: list[str] = []
        self.files: list[Any] = []

    def arun(self, message: str, *, stream: bool = False, files: Any = None) -> Any:
        self.messages.append(message)
        self.files.append(files)
        if stream:
            return self._stream()
        return self._respond()

    async def _respond(self) -> SimpleNamespace:
        if self.stub.extraction_gate is not None:
            await self.stub.extraction_gate.wait()
        if self.stub.extraction_error is not None:
            raise self.stub.extraction_error
        return SimpleNamespace(
            content=self.stub.extraction_content,
            status=self.stub.extraction_status,
        )

    async def _stream(self) -> AsyncGenerator[SimpleNamespace]:
        yield SimpleNamespace(event="RunStarted", content=None)
        for chunk in self.stub.chunks:
            yield SimpleNamespace(event="RunContent", content=chunk)
        if self.stub.stream_error is not None:
            raise self.stub.stream_error
        yield SimpleNamespace(event="RunCompleted", content="".join(self.stub.chunks))


class AgnoStub:
    """Scripted responses for the patched Agno classes."""

    def __init__(self) -> None:
        self.extraction_content: Any = json.dumps(SAMPLE_AXIOMS)
        self.extraction_status = "COMPLETED"
        self.extraction_error: Exception | None = None
        # When set, extraction waits on this event before answering
        self.extraction_gate: asyncio.Event | None = None
        self.chunks: list[str] = ["Hel", "lo"]
        self.stream_error: Exception | None = None
        self.agents: list[FakeAgent] = []
        self.models: list[dict[str, Any]] = []

    def create_agent(self, **kwargs: Any) -> FakeAgent:
        agent = FakeAgent(self, **kwargs)
        self.agents.append(agent)
        return agent

    def create_model(self, **kwargs: Any) -> SimpleNamespace:
        self.models.append(kwargs)
        return SimpleNamespace(**kwargs)

    @property
    def extraction_agents(self) -> list[FakeAgent]:
        return [a for a in self.agents if "output_schema" in a.kwargs]

    @property
    def chat_agents(self) -> list[FakeAgent]:
        return [a for a in self.agents if "db" in a.kwargs]


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Return a valid single-page PDF containing a line of text."""
    return make_pdf("Information security")


@pytest.fixture
def sample_document(sample_pdf_bytes: bytes) -> Document:
    return load_document("sample.pdf", sample_pdf_bytes, "application/pdf")


@pytest.fixture
def agno() -> Iterator[AgnoStub]:
    """Patch the Agno classes used by the session manager."""
    stub = AgnoStub()
    with (
        patch("axiom_reader.agent.session_manager.Agent", side_effect=stub.create_agent),
        patch("axiom_reader.agent.session_manager.Gemini", side_effect=stub.create_model),
        patch("axiom_reader.agent.session_manager.InMemoryDb", MagicMock),
    ):
        yield stub


@pytest.fixture
def test_config() -> SessionConfig:
    return SessionConfig(api_key="test-key", model_name="gemini-test")


@pytest.fixture
def manager(agno: AgnoStub, test_config: SessionConfig) -> SessionManager:
    """SessionManager wired to the Agno stub."""
    return SessionManager(config=test_config)


@pytest.fixture
def document_registry() -> DocumentUrlRegistry:
    return DocumentUrlRegistry()


@pytest.fixture
def session_registry(agno: AgnoStub, test_config: SessionConfig) -> SessionRegistry:
    return SessionRegistry(factory=lambda: SessionManager(config=test_config))


@pytest.fixture
async def async_client(
    session_registry: SessionRegistry,
    document_registry: DocumentUrlRegistry,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient backed by isolated registries.
    """
    app = create_app()
    app.dependency_overrides[get_session_registry] = lambda: session_registry
    app.dependency_overrides[get_document_registry] = lambda: document_registry

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
