"""Integration tests for the session endpoints.

Drives POST /sessions and DELETE /sessions/{id} through the real FastAPI
app with in-memory PDFs. The Gemini model is replaced by the Agno stub,
so everything above the model runs for real.
"""

import pytest_check as check
from agno.exceptions import ModelProviderError
from httpx import AsyncClient

from axiom_reader.agent.config import SessionConfig
from axiom_reader.agent.session_manager import SessionManager
from axiom_reader.api.documents import DocumentUrlRegistry
from axiom_reader.api.registry import SessionRegistry
from axiom_reader.models.schemas import Language, SessionCreatedResponse
from axiom_reader.parsing.pdf_parser import MAX_FILE_SIZE
from tests.conftest import AgnoStub


async def upload(client: AsyncClient, content: bytes, filename: str = "sample.pdf", **data):
    return await client.post(
        "/sessions",
        files={"file": (filename, content, "application/pdf")},
        data=data,
    )


class TestCreateSession:
    """Integration tests for POST /sessions."""

    async def test_upload_pdf_success(
        self,
        async_client: AsyncClient,
        session_registry: SessionRegistry,
        sample_pdf_bytes: bytes,
    ) -> None:
        """Upload valid PDF returns the session, its axioms and a preview URL."""
        response = await upload(async_client, sample_pdf_bytes)

        assert response.status_code == 201

        data = SessionCreatedResponse.model_validate(response.json())
        check.equal(data.filename, "sample.pdf")
        check.equal(data.pages, 1)
        check.equal(data.language, Language.EN)
        check.equal(len(data.axioms), 6)
        check.is_true(data.document_url.startswith("/documents/"))
        check.is_not_none(session_registry.get(data.session_id))

    async def test_upload_with_arabic_language(
        self, async_client: AsyncClient, agno: AgnoStub, sample_pdf_bytes: bytes
    ) -> None:
        response = await upload(async_client, sample_pdf_bytes, language="ar")

        assert response.status_code == 201
        assert response.json()["language"] == "ar"
        assert "Arabic" in agno.extraction_agents[0].messages[0]

    async def test_unknown_language_returns_422(
        self, async_client: AsyncClient, sample_pdf_bytes: bytes
    ) -> None:
        response = await upload(async_client, sample_pdf_bytes, language="fr")

        assert response.status_code == 422

    async def test_preview_url_serves_pdf(
        self, async_client: AsyncClient, sample_pdf_bytes: bytes
    ) -> None:
        created = (await upload(async_client, sample_pdf_bytes)).json()

        response = await async_client.get(created["document_url"])

        check.equal(response.status_code, 200)
        check.equal(response.headers["content-type"], "application/pdf")
        check.equal(response.content, sample_pdf_bytes)
        check.is_in("inline", response.headers["content-disposition"])

    async def test_upload_non_pdf_returns_400(
        self, async_client: AsyncClient, agno: AgnoStub
    ) -> None:
        """Upload of a text file is rejected before reaching the model."""
        response = await async_client.post(
            "/sessions",
            files={"file": ("notes.txt", b"Just some text", "text/plain")},
        )

        assert response.status_code == 400
        assert "PDF" in response.json()["detail"]
        assert agno.agents == []

    async def test_upload_fake_pdf_returns_400(
        self, async_client: AsyncClient, agno: AgnoStub
    ) -> None:
        """A .pdf name with non-PDF content fails the magic byte check."""
        response = await upload(async_client, b"This is not a PDF file")

        assert response.status_code == 400
        assert "Invalid PDF" in response.json()["detail"]
        assert agno.agents == []

    async def test_upload_oversized_returns_413(self, async_client: AsyncClient) -> None:
        oversized = b"%PDF-1.4\n" + b"\x00" * MAX_FILE_SIZE

        response = await upload(async_client, oversized)

        assert response.status_code == 413
        assert "exceeds maximum" in response.json()["detail"]

    async def test_upload_without_file_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/sessions")

        assert response.status_code == 422

    async def test_missing_api_key_returns_401(
        self,
        async_client: AsyncClient,
        session_registry: SessionRegistry,
        document_registry: DocumentUrlRegistry,
        sample_pdf_bytes: bytes,
    ) -> None:
        session_registry.create = lambda: SessionManager(config=SessionConfig(api_key=""))

        response = await upload(async_client, sample_pdf_bytes)

        check.equal(response.status_code, 401)
        check.is_in("API key", response.json()["detail"])
        check.equal(len(session_registry), 0)
        check.equal(len(document_registry), 0)

    async def test_rejected_api_key_returns_401(
        self, async_client: AsyncClient, agno: AgnoStub, sample_pdf_bytes: bytes
    ) -> None:
        agno.extraction_error = ModelProviderError("API key not valid.", status_code=400)

        response = await upload(async_client, sample_pdf_bytes)

        assert response.status_code == 401

    async def test_malformed_extraction_returns_502(
        self,
        async_client: AsyncClient,
        agno: AgnoStub,
        session_registry: SessionRegistry,
        sample_pdf_bytes: bytes,
    ) -> None:
        agno.extraction_content = "I could not find any axioms."

        response = await upload(async_client, sample_pdf_bytes)

        check.equal(response.status_code, 502)
        check.is_true(response.json()["detail"].startswith("Could not extract axioms"))
        check.equal(len(session_registry), 0)

    async def test_upstream_failure_returns_502(
        self, async_client: AsyncClient, agno: AgnoStub, sample_pdf_bytes: bytes
    ) -> None:
        agno.extraction_error = ModelProviderError("Service unavailable", status_code=503)

        response = await upload(async_client, sample_pdf_bytes)

        assert response.status_code == 502
        assert "Service unavailable" in response.json()["detail"]

    async def test_cors_headers_present(self, async_client: AsyncClient) -> None:
        response = await async_client.options(
            "/sessions",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert "access-control-allow-origin" in response.headers


class TestDeleteSession:
    """Integration tests for DELETE /sessions/{id}."""

    async def test_delete_resets_session_and_revokes_url(
        self,
        async_client: AsyncClient,
        session_registry: SessionRegistry,
        document_registry: DocumentUrlRegistry,
        sample_pdf_bytes: bytes,
    ) -> None:
        created = (await upload(async_client, sample_pdf_bytes)).json()
        manager = session_registry.get(created["session_id"])

        response = await async_client.delete(f"/sessions/{created['session_id']}")

        check.equal(response.status_code, 204)
        check.is_false(manager.is_active)
        check.is_none(session_registry.get(created["session_id"]))
        check.equal(len(document_registry), 0)

        preview = await async_client.get(created["document_url"])
        check.equal(preview.status_code, 404)

    async def test_delete_is_idempotent(
        self, async_client: AsyncClient, sample_pdf_bytes: bytes
    ) -> None:
        created = (await upload(async_client, sample_pdf_bytes)).json()

        first = await async_client.delete(f"/sessions/{created['session_id']}")
        second = await async_client.delete(f"/sessions/{created['session_id']}")

        assert first.status_code == 204
        assert second.status_code == 204

    async def test_delete_unknown_session_returns_204(self, async_client: AsyncClient) -> None:
        response = await async_client.delete("/sessions/does-not-exist")

        assert response.status_code == 204

    async def test_sessions_are_independent(
        self,
        async_client: AsyncClient,
        session_registry: SessionRegistry,
        sample_pdf_bytes: bytes,
    ) -> None:
        first = (await upload(async_client, sample_pdf_bytes)).json()
        second = (await upload(async_client, sample_pdf_bytes)).json()

        await async_client.delete(f"/sessions/{first['session_id']}")

        assert session_registry.get(second["session_id"]).is_active
        assert (await async_client.get(second["document_url"])).status_code == 200


async def test_unknown_document_returns_404(async_client: AsyncClient) -> None:
    response = await async_client.get("/documents/never-issued")

    assert response.status_code == 404
    assert response.json()["detail"] == "Document not found"


async def test_health_check(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "axiom-reader"}

