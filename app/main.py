from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import api_router
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging
from app.db.base import Base
from app.db.session import build_engine, build_sessionmaker
from app.schemas.envelope import ErrorResponse, FieldError

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine = build_engine(settings)
    try:
        async with engine.begin() as conn:  # Verify the database connection and ensure the schema on startup.
            await conn.run_sync(Base.metadata.create_all)
    except Exception as exc:
        logger.error("database_connection_failed", error=str(exc), exc_info=exc)
        await engine.dispose()
        raise
    logger.info("database_connected", dialect=engine.dialect.name)
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    yield
    await engine.dispose()


def _field_name(err: dict) -> str:
    # Malformed JSON reports a character offset as its location.
    if err["type"] == "json_invalid":
        return "body"
    parts = [str(part) for part in err["loc"] if part != "body"]
    return ".".join(parts) or "body"


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = [FieldError(field=_field_name(err), message=err["msg"]) for err in exc.errors()]
    body = ErrorResponse(error="Validation failed", details=details)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=jsonable_encoder(body))


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": str(exc.detail)})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", method=request.method, path=request.url.path, exc_info=exc)
    body = ErrorResponse(error="Internal server error").model_dump(exclude_none=True)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/", tags=["info"])
    async def welcome() -> dict:
        return {
            "message": "Welcome to the Users API",
            "endpoints": {"users": f"{settings.API_PREFIX}/users"},
        }

    @app.get("/health", tags=["health"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
