"""Error kinds raised by the session layer.

Every failure a caller can observe derives from SessionError, so the UI
and the API can catch at one boundary and map each kind to a message.
"""


class SessionError(Exception):
    """Base class for session failures."""

    pass


class DocumentValidationError(SessionError):
    """Raised when an upload is missing, not a PDF, or unreadable."""

    pass


class UpstreamError(SessionError):
    """Raised when the model API call or stream fails."""

    pass


class AuthenticationRequired(UpstreamError):
    """Raised when the API credential is missing or rejected."""

    pass


class MalformedResponse(SessionError):
    """Raised when extracted axioms cannot be parsed."""

    pass


class SessionNotInitialized(SessionError):
    """Raised when a query is made without an active session."""

    pass


class RequestInFlight(SessionError):
    """Raised when a second request starts while one is pending."""

    pass
