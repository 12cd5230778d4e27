class AppError(Exception):
    """Base class for all application errors."""

    status_code = 500
    code = "internal_error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidRequestError(AppError):
    """Client sent a malformed or incomplete request (400)."""

    status_code = 400
    code = "invalid_request"


class UpstreamServiceError(AppError):
    """Remote audio host or AI provider could not be reached or rejected the call (500)."""

    status_code = 500
    code = "upstream_error"


def upstream_message(exc: BaseException, fallback: str) -> str:
    """Prefer the underlying error's own text, falling back when it has none."""

    message = str(exc).strip()
    return message or fallback
