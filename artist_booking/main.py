import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models  # noqa: F401 - registers tables with Base
from .config import ALLOWED_ORIGINS, ENVIRONMENT, LOG_LEVEL
from .database import Base, engine
from .domain.completion.router import artist_router as artist_completion_router
from .domain.completion.router import venue_router as venue_completion_router
from .domain.gigs.router import artist_router as artist_gigs_router
from .domain.gigs.router import venue_router as venue_gigs_router
from .domain.messages.router import router as messages_router
from .domain.proposals.router import artist_router as artist_proposals_router
from .domain.proposals.router import venue_router as venue_proposals_router
from .domain.ratings.router import router as ratings_router
from .errors import (
    MSG_INTERNAL_ERROR,
    MSG_VALIDATION_ERROR,
    STATUS_BAD_REQUEST,
    STATUS_INTERNAL_ERROR,
    STATUS_NOT_FOUND,
    AppError,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Artist Booking API ({ENVIRONMENT})")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
    except (OperationalError, ProgrammingError, IntegrityError) as e:
        # Several workers booting together can race on CREATE TABLE; that is only
        # harmless if every table now exists
        missing = set(Base.metadata.tables) - set(inspect(engine).get_table_names())
        if missing:
            logger.error(f"Schema creation failed, missing {sorted(missing)}: {e}")
            raise
        logger.info("Schema already created by another worker")
    else:
        logger.info(f"Schema ready: {', '.join(sorted(Base.metadata.tables))}")

    yield
    engine.dispose()
    logger.info("Artist Booking API stopped")


app = FastAPI(title="Artist Booking API", version="1.0.0", lifespan=lifespan)


def _field_name(loc) -> str:
    """Last named element of a pydantic error location, e.g. ("body", "rating") -> "rating"."""
    for part in reversed(loc or ()):
        if isinstance(part, str):
            return part
    return "body"


def _clean_message(message: str) -> str:
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= STATUS_INTERNAL_ERROR:
        logger.error(f"{request.method} {request.url.path} - {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render body, query and path validation failures as a 400 with per-field messages"""
    errors = [
        {"field": _field_name(error.get("loc")), "message": _clean_message(error.get("msg", ""))}
        for error in exc.errors()
    ]
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    return JSONResponse(
        status_code=STATUS_BAD_REQUEST,
        content={"status": "fail", "message": MSG_VALIDATION_ERROR, "error": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == STATUS_NOT_FOUND:
        message = f"Can't find {request.url.path} on this server!"
    else:
        message = str(exc.detail)
    status = "fail" if exc.status_code < STATUS_INTERNAL_ERROR else "error"
    return JSONResponse(status_code=exc.status_code, content={"status": status, "message": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} - Unhandled error: {exc}")
    content = {"status": "error", "message": MSG_INTERNAL_ERROR}
    if ENVIRONMENT != "production":
        content["error"] = str(exc)
    return JSONResponse(status_code=STATUS_INTERNAL_ERROR, content=content)


# Log CORS configuration for debugging
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

app.include_router(venue_gigs_router)
app.include_router(artist_gigs_router)
app.include_router(artist_proposals_router)
app.include_router(venue_proposals_router)
app.include_router(artist_completion_router)
app.include_router(venue_completion_router)
app.include_router(ratings_router)
app.include_router(messages_router)

# Routes


@app.get("/")
def root():
    return {"message": "Artist Booking API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
