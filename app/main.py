import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from app.db.init_db import create_database
from app.db.base import Base
from app.db.session import engine
from app.core.config import settings
from app.core.errors import (
    ConcurrencyConflictError,
    ErrorCode,
    NotFoundError,
    ReferentialIntegrityError,
    ServiceError,
    UniqueViolationError,
    ValidationError,
)
from app.api.v1.router import api_router
from app.schemas.common import ErrorResponse, FieldErrorResponse

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists and create tables
    create_database()
    Base.metadata.create_all(bind=engine)
    logger.info("%s ready", settings.PROJECT_NAME)
    yield


from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Service errors -> HTTP
# ---------------------------------------------------------------------------


def _status_for(exc: ServiceError) -> int:
    # UniqueViolationError is a ValidationError, so it must be matched first
    if isinstance(exc, UniqueViolationError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (ReferentialIntegrityError, ConcurrencyConflictError)):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    body = ErrorResponse(error=exc.code.value, message=exc.message)
    if isinstance(exc, ValidationError):
        body.errors = [FieldErrorResponse(field=e.field, message=e.message) for e in exc.errors]
    return JSONResponse(status_code=_status_for(exc), content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies get the same envelope as service-level validation failures
    body = ErrorResponse(
        error=ErrorCode.VALIDATION_FAILED.value,
        message="Validation failed",
        errors=[FieldErrorResponse(field=str(e["loc"][-1]), message=e["msg"]) for e in exc.errors()],
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body.model_dump())


app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    return {"Hello": "EventEase"}
