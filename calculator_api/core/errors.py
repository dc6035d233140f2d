"""
Service exceptions and error responses.

Every error leaves the API as

    {"error": {"type": ..., "message": ..., "code": ..., "details": ...}}

where ``code`` is present for calculator errors and ``details`` whenever the
exception carries any.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from calclib.errors import CalcError, NothingToEvaluateError

from .logging import get_logger

logger = get_logger(__name__)


class CalculatorAPIError(Exception):
    """Base exception for service errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class SessionNotFoundError(CalculatorAPIError):
    """Raised when a calculator session does not exist"""

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Session '{session_id}' not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"session_id": session_id}
        )


class SessionLimitError(CalculatorAPIError):
    """Raised when no more sessions can be opened"""

    def __init__(self, limit: int):
        super().__init__(
            message=f"Session limit of {limit} reached",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"limit": limit}
        )


class HistoryEntryNotFoundError(CalculatorAPIError):
    """Raised when a history index is out of range"""

    def __init__(self, session_id: str, index: int):
        super().__init__(
            message=f"Session '{session_id}' has no history entry {index}",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"session_id": session_id, "index": index}
        )


class InvalidKeyError(CalculatorAPIError):
    """Raised for a key that is neither on the keypad nor a valid character"""

    def __init__(self, key: str):
        super().__init__(
            message=f"Invalid key '{key}'",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"key": key}
        )


def calc_error_status(error: CalcError) -> int:
    """Incomplete input is a bad request; anything else is unprocessable"""
    if isinstance(error, NothingToEvaluateError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_422_UNPROCESSABLE_ENTITY


def error_body(
    error_type: str,
    message: Any,
    code: Optional[str] = None,
    details: Any = None
) -> Dict[str, Any]:
    """Build the JSON error envelope"""
    error: Dict[str, Any] = {"type": error_type, "message": message}
    if code is not None:
        error["code"] = code
    if details:
        error["details"] = details
    return {"error": error}


def create_error_response(error: Exception, status_code: int) -> JSONResponse:
    """Log an expected error and turn it into a JSON response"""
    code = error.code if isinstance(error, CalcError) else None
    details = getattr(error, "details", None)

    log = logger.error if status_code >= 500 else logger.info
    log(
        f"{error.__class__.__name__}: {error}",
        extra_data={"status_code": status_code, "code": code}
    )

    return JSONResponse(
        status_code=status_code,
        content=error_body(error.__class__.__name__, str(error), code, details)
    )


async def calculator_api_error_handler(request: Request, exc: CalculatorAPIError) -> JSONResponse:
    return create_error_response(exc, exc.status_code)


async def calc_error_handler(request: Request, exc: CalcError) -> JSONResponse:
    """Errors raised by calclib while evaluating a request"""
    return create_error_response(exc, calc_error_status(exc))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body("HTTPException", exc.detail),
        headers=getattr(exc, "headers", None)
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or oversized request bodies"""
    problems = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
        for e in exc.errors()
    ]
    logger.info(
        "Request validation failed",
        extra_data={"path": request.url.path, "problems": problems}
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body("ValidationError", "Request validation failed", details=problems)
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unexpected error",
        extra_data={"path": request.url.path}
    )

    from .config import settings
    message = str(exc) if settings.DEBUG else "An internal error occurred"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("InternalServerError", message)
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register error handlers with FastAPI app"""
    app.add_exception_handler(CalculatorAPIError, calculator_api_error_handler)
    app.add_exception_handler(CalcError, calc_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
