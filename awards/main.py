"""FastAPI application entry point."""
import logging
import os
import time
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from awards.config import get_settings
from awards.database import create_tables
from awards.routers import admin, auth, categories, health, nominations, rsvp, votes
from awards.routers import settings as settings_router
from awards.services.email_client import get_email_client
from awards.version import APP_VERSION

settings = get_settings()

# Create logs directory if it doesn't exist
logs_dir = Path(settings.log_dir)
logs_dir.mkdir(parents=True, exist_ok=True)

log_file = logs_dir / "awards.log"
sql_log_file = logs_dir / "awards_sql.log"
api_log_file = logs_dir / "awards_api.log"

log_format = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# Rotating file handlers: 1MB max size, keep 5 backup files
rotating_handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=5, encoding='utf-8')
rotating_handler.setFormatter(log_format)

sql_rotating_handler = RotatingFileHandler(sql_log_file, maxBytes=1024 * 1024, backupCount=5, encoding='utf-8')
sql_rotating_handler.setFormatter(log_format)

api_rotating_handler = RotatingFileHandler(api_log_file, maxBytes=2 * 1024 * 1024, backupCount=5, encoding='utf-8')
api_rotating_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))

# Force=True overrides any existing configuration (e.g., from uvicorn)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        rotating_handler,
    ],
    force=True,
)

logger = logging.getLogger(__name__)

api_logger = logging.getLogger("awards.api")
api_logger.handlers.clear()
api_logger.addHandler(api_rotating_handler)
api_logger.setLevel(logging.INFO)
api_logger.propagate = False

uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.setLevel(logging.INFO)
if rotating_handler not in uvicorn_access_logger.handlers:
    uvicorn_access_logger.addHandler(rotating_handler)

# SQLAlchemy engine logs go to a separate file only
sqlalchemy_logger = logging.getLogger("sqlalchemy.engine.Engine")
sqlalchemy_logger.handlers.clear()
sqlalchemy_logger.addHandler(sql_rotating_handler)
sqlalchemy_logger.setLevel(logging.INFO)
sqlalchemy_logger.propagate = False


class SQLTransactionFilter(logging.Filter):
    def filter(self, record):
        if record.levelno == logging.INFO and hasattr(record, 'getMessage'):
            message = record.getMessage()

            if any(keyword in message for keyword in ['ROLLBACK', 'BEGIN', 'COMMIT', 'generated in']):
                return False

            # Collapse multi-line statements onto one line
            if any(kw in message for kw in ['SELECT', 'DELETE', 'INSERT', 'UPDATE']):
                record.msg = ' '.join(message.split())
                record.args = ()

        return True


sqlalchemy_logger.addFilter(SQLTransactionFilter())

logger.info(f"Logging initialized: general={log_file.absolute()} sql={sql_log_file.absolute()}")


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Manage application startup and shutdown tasks."""
    logger.info("=" * 60)
    logger.info("Awards API Starting")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Database: {settings.database_url.split('@')[-1] if '@' in settings.database_url else 'SQLite'}")
    logger.info(f"Email delivery: {'API' if settings.email_api_key else 'log only'}")
    logger.info("=" * 60)

    await create_tables()

    try:
        yield
    finally:
        try:
            await get_email_client().close()
        except Exception as e:
            logger.error(f"Error closing email client: {e}")
        logger.info("Awards API Shutting Down... Goodbye!")


app = FastAPI(
    title="Awards API",
    description="Nominations, voting and RSVPs for the awards event",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors with user-friendly messages."""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    errors = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field_path = " -> ".join(str(x) for x in loc[1:]) if len(loc) > 1 else "unknown field"
        errors.append({
            "field": field_path,
            "message": error.get("msg", "Validation error"),
            "type": error.get("type", "unknown"),
        })

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Request validation failed",
            "errors": errors,
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "internal_server_error"})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with its status code and timing to the API log file."""
    start_time = time.time()
    client_ip = request.client.host if request.client else "unknown"
    method = request.method
    path = request.url.path
    request_id = f"{method}:{path}:{int(start_time * 1000) % 100000}"

    api_logger.info(f">> {request_id} | START | {method} {path} | IP: {client_ip}")
    try:
        response = await call_next(request)
    except Exception as e:
        api_logger.error(
            f"<< {request_id} | EXCEPTION | {method} {path} | "
            f"Error: {str(e)[:100]} | Time: {time.time() - start_time:.3f}s"
        )
        raise

    api_logger.info(
        f"<< {request_id} | COMPLETE | {method} {path} | "
        f"Status: {response.status_code} | Time: {time.time() - start_time:.3f}s"
    )
    return response


allowed_origins = [origin for origin in os.getenv("ALLOWED_ORIGINS", "").split(",") if origin]
if not allowed_origins:
    allowed_origins = [
        settings.frontend_url,
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(nominations.router, prefix="/nominations", tags=["nominations"])
api_router.include_router(votes.router, prefix="/votes", tags=["votes"])
api_router.include_router(settings_router.router, prefix="/settings", tags=["settings"])
api_router.include_router(rsvp.router, prefix="/rsvp", tags=["rsvp"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(health.router, tags=["health"])
app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Awards API",
        "version": APP_VERSION,
        "environment": settings.environment,
        "docs": "/docs",
    }
