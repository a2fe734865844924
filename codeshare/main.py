"""Entry point for the CodeShare service."""

import time
import uuid
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from common.logging_config import reset_request_id, set_request_id, setup_logging
from codeshare.codes import CodeGenerator
from codeshare.config import CORS_ORIGINS, SERVER_HOST, SERVER_PORT
from codeshare.database import Database
from codeshare.exceptions import (
    CodeNotFoundError,
    CodeShareException,
    CodeSpaceExhaustedError,
    ConflictError,
    ContainerAlreadyExistsError,
    ContainerNotFoundError,
    DuplicateCodeError,
    FileEntryNotFoundError,
    ForbiddenError,
    NotFoundError,
    ShareNotFoundError,
    StoreError,
    ValidationError,
)
from codeshare.routes.container_routes import router as container_router
from codeshare.routes.share_routes import router as share_router

logger = setup_logging('codeshare')


NOT_FOUND_CODES = {
    CodeNotFoundError: "CODE_NOT_FOUND",
    ShareNotFoundError: "SHARE_NOT_FOUND",
    ContainerNotFoundError: "CONTAINER_NOT_FOUND",
    FileEntryNotFoundError: "FILE_NOT_FOUND",
}

CONFLICT_CODES = {
    ContainerAlreadyExistsError: "CONTAINER_EXISTS",
    DuplicateCodeError: "DUPLICATE_CODE",
}

HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.

    The request id is bound to the logging context for the whole request, so
    every record logged while serving it carries the id.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    token = set_request_id(request_id)

    try:
        start_time = time.time()
        logger.info(f"Request started: {request.method} {request.url.path}")

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s"
        )
    finally:
        reset_request_id(token)

    response.headers["X-Request-ID"] = request_id

    return response


def error_response(status_code: int, detail: str, code: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code},
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"Validation error: {exc} path={request.url.path}")
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc), "VALIDATION_ERROR")


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    detail = f"{location}: {first.get('msg', 'invalid request')}" if location else "Invalid request"
    logger.warning(f"Request validation error: {detail} path={request.url.path}")
    return error_response(status.HTTP_400_BAD_REQUEST, detail, "VALIDATION_ERROR")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Give framework-raised errors (unknown route, wrong method) the same body
    shape as the service's own errors.
    """
    logger.warning(f"HTTP {exc.status_code}: {exc.detail} path={request.url.path}")
    return error_response(
        exc.status_code,
        str(exc.detail),
        HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        headers=getattr(exc, "headers", None),
    )


async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning(f"Not found: {exc} path={request.url.path}")
    return error_response(
        status.HTTP_404_NOT_FOUND, str(exc), NOT_FOUND_CODES.get(type(exc), "NOT_FOUND")
    )


async def conflict_handler(request: Request, exc: ConflictError):
    logger.warning(f"Conflict: {exc} path={request.url.path}")
    return error_response(
        status.HTTP_409_CONFLICT, str(exc), CONFLICT_CODES.get(type(exc), "CONFLICT")
    )


async def forbidden_handler(request: Request, exc: ForbiddenError):
    logger.warning(f"Access refused: {exc} path={request.url.path}")
    return error_response(status.HTTP_401_UNAUTHORIZED, str(exc), "INVALID_SECRET")


async def code_space_exhausted_handler(request: Request, exc: CodeSpaceExhaustedError):
    logger.error(f"Code space exhausted: {exc} path={request.url.path}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), "CODE_SPACE_EXHAUSTED"
    )


async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Store error: {exc} path={request.url.path}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage failure", "STORE_ERROR")


async def codeshare_exception_handler(request: Request, exc: CodeShareException):
    logger.error(f"CodeShare exception: {exc} path={request.url.path}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), "INTERNAL_ERROR")


def create_app(
    database: Optional[Database] = None,
    code_generator: Optional[CodeGenerator] = None,
    cors_origins: Optional[List[str]] = None,
) -> FastAPI:
    """
    Build the FastAPI application around an explicit store handle.

    Args:
        database: Store handle; defaults to the configured database path
        code_generator: Code source; defaults to a system-random generator
        cors_origins: Browser origins allowed to call the API; defaults to
            CODESHARE_CORS_ORIGINS

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="CodeShare",
        description="Share files and fetch them back with a short code",
        version="1.0.0"
    )

    app.state.database = database or Database()
    app.state.code_generator = code_generator or CodeGenerator()

    app.middleware("http")(log_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if cors_origins is not None else CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(ForbiddenError, forbidden_handler)
    app.add_exception_handler(CodeSpaceExhaustedError, code_space_exhausted_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(CodeShareException, codeshare_exception_handler)

    @app.on_event("startup")
    def startup_event():
        """
        Initialize the database schema on application startup.
        """
        logger.info("CodeShare service starting up...")
        app.state.database.init_schema()
        logger.info("Database initialized")

    app.include_router(share_router)
    app.include_router(container_router)

    @app.get("/")
    def root():
        """
        Root endpoint for health check.
        """
        return {"message": "CodeShare API", "status": "running"}

    @app.get("/health")
    def health_check():
        """
        Liveness check. Returns 200 if the process is serving requests.
        """
        return {"status": "healthy", "service": "codeshare"}

    @app.get("/ready")
    def ready_check():
        """
        Readiness check. Verifies the database answers.
        """
        try:
            app.state.database.ping()
            db_status = "ok"
        except StoreError as e:
            db_status = f"error: {str(e)}"

        ready = db_status == "ok"
        status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

        return JSONResponse(
            status_code=status_code,
            content={"ready": ready, "database": db_status}
        )

    return app


app = create_app()


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "codeshare.main:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
    )


if __name__ == "__main__":
    main()
