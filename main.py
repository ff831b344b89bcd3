from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.deps import build_services
from app.api.v1.endpoints import auth, resumes, taxonomy
from app.core.config import Settings, settings
from app.core.errors import AppError
from app.db.database import connect_to_mongo, close_mongo_connection

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not await connect_to_mongo(settings):
        logger.warning("Starting without a database connection; store calls will fail")
    app.state.services = build_services(settings)
    yield
    app.state.services.taxonomy.close()
    await close_mongo_connection()


def _error_body(message: str, detail, config: Settings) -> dict:
    body = {"status": "error", "message": message}
    if detail is not None and not config.is_production:
        body["error"] = jsonable_encoder(detail)
    return body


def register_exception_handlers(app: FastAPI, config: Settings = settings) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.detail})")
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.detail, config))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=_error_body("Invalid request", exc.errors(), config))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=_error_body("Internal server error", str(exc), config))


app = FastAPI(title="AI Job Accessibility API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(resumes.router, prefix="/api/resume", tags=["resume"])
app.include_router(taxonomy.router, prefix="/api", tags=["taxonomy"])


@app.get("/api/health", tags=["health"])
async def health():
    """Liveness check; does not touch the database."""
    return {
        "status": "success",
        "message": "AI Job Accessibility API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.APP_ENV,
    }
