"""
FastAPI backend for the calculator.

A thin client of calclib:
- Stateless expression evaluation and keystroke validation
- Keypad-driven calculator sessions with history
- Structured logging
- Consistent JSON error responses
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List
from uuid import UUID

from calclib.session import KEYPAD

from .core import (
    settings,
    setup_logging,
    get_logger,
    register_error_handlers,
)
from .models import Evaluation, Validation, SessionView
from .repositories import get_session_repository
from .services import CalculatorService, get_calculator_service

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info(
        "Starting Calculator API",
        extra_data={
            "environment": settings.ENVIRONMENT,
            "debug": settings.DEBUG
        }
    )
    yield
    logger.info("Shutting down Calculator API")


app = FastAPI(
    title=settings.APP_NAME,
    description="REST API for evaluating arithmetic expressions",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


# Dependency injection
def get_calculator_service_dep() -> CalculatorService:
    """Get calculator service instance"""
    return get_calculator_service(get_session_repository())


# API Request/Response Models
class EvaluateRequest(BaseModel):
    """Request to evaluate an expression"""
    expression: str = Field(
        ...,
        max_length=settings.MAX_EXPRESSION_LENGTH,
        description="Expression using + - * / × ÷ ( ) ! and digits"
    )


class ValidateRequest(BaseModel):
    """Request to check text against the keystroke filter"""
    text: str = Field(..., max_length=settings.MAX_EXPRESSION_LENGTH)


class KeyRequest(BaseModel):
    """A keypad key press"""
    key: str = Field(..., min_length=1, max_length=2, description="Keypad key, e.g. '7', '×', 'AC', '='")


class InputRequest(BaseModel):
    """Text typed into the input line"""
    text: str = Field(..., max_length=settings.MAX_EXPRESSION_LENGTH)


class InputResponse(BaseModel):
    """Session state after typing"""
    accepted: bool
    session: SessionView


# API Routes

@app.get("/")
async def read_root():
    """API root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "endpoints": {
            "evaluate": "/evaluate",
            "validate": "/validate",
            "keypad": "/keypad",
            "sessions": "/sessions",
            "session": "/sessions/{session_id}",
            "health": "/health"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT
    }


@app.post("/evaluate", response_model=Evaluation)
async def evaluate_expression(
    request: EvaluateRequest,
    service: CalculatorService = Depends(get_calculator_service_dep)
):
    """
    Evaluate an expression.

    Incomplete input answers 400, invalid input 422; the error body carries
    the calculator's message and a stable ``code``.
    """
    return await service.evaluate(request.expression)


@app.post("/validate", response_model=Validation)
async def validate_text(
    request: ValidateRequest,
    service: CalculatorService = Depends(get_calculator_service_dep)
):
    """Check text against the keystroke filter"""
    return await service.validate(request.text)


@app.get("/keypad", response_model=List[List[str]])
async def get_keypad():
    """Basic keypad layout, row by row"""
    return [list(row) for row in KEYPAD]


@app.post("/sessions", response_model=SessionView, status_code=status.HTTP_201_CREATED)
async def create_session(
    service: CalculatorService = Depends(get_calculator_service_dep)
):
    """Open a new calculator session"""
    record = await service.create_session()
    return SessionView.from_record(record)


@app.get("/sessions/{session_id}", response_model=SessionView)
async def get_session(
    session_id: UUID,
    service: CalculatorService = Depends(get_calculator_service_dep)
):
    """Get the input, result and history of a session"""
    record = await service.get_session(session_id)
    return SessionView.from_record(record)


@app.post("/sessions/{session_id}/keys", response_model=SessionView)
async def press_key(
    session_id: UUID,
    request: KeyRequest,
    service: CalculatorService = Depends(get_calculator_service_dep)
):
    """Press a keypad key"""
    record = await service.press_key(session_id, request.key)
    return SessionView.from_record(record)


@app.post("/sessions/{session_id}/input", response_model=InputResponse)
async def type_text(
    session_id: UUID,
    request: InputRequest,
    service: CalculatorService = Depends(get_calculator_service_dep)
):
    """Replace the input line; text containing '=' evaluates instead"""
    record, accepted = await service.type_text(session_id, request.text)
    return InputResponse(accepted=accepted, session=SessionView.from_record(record))


@app.post("/sessions/{session_id}/history/{index}/copy", response_model=SessionView)
async def copy_history_result(
    session_id: UUID,
    index: int,
    service: CalculatorService = Depends(get_calculator_service_dep)
):
    """Append a history entry's result to the input line"""
    record = await service.copy_result(session_id, index)
    return SessionView.from_record(record)


@app.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: UUID,
    service: CalculatorService = Depends(get_calculator_service_dep)
):
    """Close a session"""
    await service.delete_session(session_id)


def run() -> None:
    import uvicorn

    uvicorn.run(
        "calculator_api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
