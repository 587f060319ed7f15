import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

log = structlog.get_logger()


class AuthDenied(Exception):
    """Raised by request guards; rendered as a JSON `{"error": ...}` denial."""

    def __init__(
        self, message: str, status_code: int = status.HTTP_401_UNAUTHORIZED
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def denial_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def auth_denied_handler(request: Request, exc: AuthDenied) -> JSONResponse:
    log.debug("auth.request_denied", status_code=exc.status_code)
    return denial_response(exc.message, exc.status_code)
