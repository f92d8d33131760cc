"""SSE chat endpoint streaming grounded answers for an open session."""

import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from axiom_reader.api.registry import SessionRegistry, get_session_registry
from axiom_reader.errors import RequestInFlight, SessionError, SessionNotInitialized
from axiom_reader.models.schemas import ChatRequest, StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


async def _event_stream(chunks: AsyncIterator[str]) -> AsyncIterator[str]:
    """Wrap response fragments as SSE events, ending with a done event.

    A failure after partial output ends the stream with an error event;
    the fragments already sent stay valid.
    """
    try:
        async for content in chunks:
            yield _sse(StreamChunk(content=content, done=False, status=StreamStatus.GENERATING))
    except SessionError as e:
        logger.warning(f"Chat stream failed: {e}")
        yield _sse(StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(e)))
        return

    yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))


@router.post("/stream")
async def chat_stream(
    request: ChatRequest,
    sessions: SessionRegistry = Depends(get_session_registry),
) -> StreamingResponse:
    """Stream the answer to a question about the session's document.

    Returns:
        text/event-stream of StreamChunk JSON payloads.

    Raises:
        404: Unknown or reset session.
        409: A request for this session is still in flight.
    """
    manager = sessions.get(request.session_id)
    if manager is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )

    try:
        chunks = manager.query(request.message)
    except SessionNotInitialized as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not initialized",
        ) from e
    except RequestInFlight as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e

    return StreamingResponse(
        _event_stream(chunks),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
