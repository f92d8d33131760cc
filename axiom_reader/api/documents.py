"""Preview URLs for uploaded documents.

Each upload gets a URL that serves its PDF until the session is reset,
at which point the URL is revoked and the bytes are released.
"""

import base64
import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, Response, status

from axiom_reader.models.schemas import Document
from axiom_reader.parsing.pdf_parser import PDF_MIME_TYPE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

URL_PREFIX = "/documents/"


class DocumentUrlRegistry:
    """In-memory map from preview URL tokens to documents."""

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}

    def create_url(self, document: Document) -> str:
        token = secrets.token_urlsafe(16)
        self._documents[token] = document
        return f"{URL_PREFIX}{token}"

    def revoke_url(self, url: str | None) -> None:
        """Release the document behind a URL. Unknown URLs are ignored."""
        if not url:
            return
        token = url.removeprefix(URL_PREFIX)
        if self._documents.pop(token, None) is not None:
            logger.info(f"Revoked document URL {url}")

    def get(self, token: str) -> Document | None:
        return self._documents.get(token)

    def clear(self) -> None:
        self._documents.clear()

    def __len__(self) -> int:
        return len(self._documents)


# Module-level singleton instance
_registry: DocumentUrlRegistry | None = None


def get_document_registry() -> DocumentUrlRegistry:
    """Get or create the global document URL registry.

    Returns:
        The DocumentUrlRegistry instance.
    """
    global _registry
    if _registry is None:
        _registry = DocumentUrlRegistry()
    return _registry


@router.get("/{token}")
async def get_document(
    token: str,
    documents: DocumentUrlRegistry = Depends(get_document_registry),
) -> Response:
    """Serve an uploaded PDF for inline preview.

    Raises:
        404: The URL was never issued or has been revoked.
    """
    document = documents.get(token)
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )

    return Response(
        content=base64.b64decode(document.base64),
        media_type=PDF_MIME_TYPE,
        headers={"Content-Disposition": f'inline; filename="{document.name}"'},
    )
