import logging
import time
import traceback
import uuid
from contextlib import asynccontextmanager

import sentry_sdk
from portfolio_admin.config import get_settings
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

settings = get_settings()
if settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        traces_sample_rate=0.1,
        environment=settings.environment or "production",
    )

from fastapi import APIRouter
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

from portfolio_admin.exceptions import PortfolioError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from sqlalchemy import text
    from .database import engine

    # Surface a missing schema at boot instead of as 500s on the first request
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1 FROM resumes LIMIT 1"))
    except Exception as e:
        logger.warning("resumes table not reachable (%s). Run: alembic upgrade head", e)

    yield

    await engine.dispose()


class TrailingSlashMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        if request.url.path != "/" and request.url.path.endswith("/"):
            scope = request.scope
            scope["path"] = scope["path"].rstrip("/")
            if "raw_path" in scope and isinstance(scope["raw_path"], (bytes, bytearray)):
                scope["raw_path"] = scope["raw_path"].rstrip(b"/")
        return await call_next(request)


from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from portfolio_admin.dependencies import limiter
from portfolio_admin.database import get_db

app = FastAPI(
    title="Portfolio Admin API",
    description="""
## Portfolio Admin API Overview

Backend for the portfolio admin panel. It stores and serves:

- **Personal details**: name, role, bio and links shown on the portfolio
- **Education**: core objective and academic history
- **Skills**: skill groups and coding-platform profiles
- **Projects**: project cards, filterable by category
- **Resumes**: uploaded PDFs, the active resume, and the public download link
""",
    version="1.0.0",
    lifespan=lifespan,
    redirect_slashes=False,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS must be first in execution order (add last - Starlette runs last-added first)
# so CORS headers are added even on redirect responses (e.g. 307)
_cors_origins = [
    o for o in [
        settings.frontend_url,
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    if o
]
_cors_origins = list(dict.fromkeys(_cors_origins))  # dedupe preserving order
app.add_middleware(TrailingSlashMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    # The admin UI reads the download filename from this header
    expose_headers=["Content-Disposition"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = str(uuid.uuid4())[:8]
    start_time = time.time()

    logger.info("[%s] %s %s", request_id, request.method, request.url.path)

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info("[%s] %d (%.2fs)", request_id, response.status_code, duration)

    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def redirect_old_api_paths(request: Request, call_next):
    path = request.url.path
    # Redirect /api/health to /health (health is at root level)
    if path == "/api/health":
        if request.method == "GET":
            return RedirectResponse(url="/health", status_code=307)
        request.scope["path"] = "/health"
        return await call_next(request)
    # Rewrite /api/xxx to /api/v1/xxx (except /api/v1 paths)
    # Use path rewrite for ALL methods - 307 redirects break CORS for cross-origin fetch
    if path.startswith("/api/") and not path.startswith("/api/v1/"):
        new_path = path.replace("/api/", "/api/v1/", 1)
        request.scope["path"] = new_path
    return await call_next(request)


from .routers import (  # noqa: E402
    coding_profiles,
    education,
    personal,
    projects,
    resumes,
    skill_groups,
)

# Create v1 API router
api_v1 = APIRouter(prefix="/api/v1")

api_v1.include_router(personal.router, tags=["Personal Details"])
api_v1.include_router(education.router, tags=["Education"])
api_v1.include_router(projects.router, tags=["Projects"])
api_v1.include_router(skill_groups.router, prefix="/skill-groups", tags=["Skills"])
api_v1.include_router(coding_profiles.router, prefix="/profiles", tags=["Skills"])
api_v1.include_router(resumes.router, tags=["Resumes"])

# Mount v1 router
app.include_router(api_v1)


@app.exception_handler(PortfolioError)
async def portfolio_error_handler(request: Request, exc: PortfolioError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    else:
        logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def jsonable_errors(errors) -> list[dict]:
    # pydantic puts the raw exception under "ctx"; it is not JSON serialisable
    out = []
    for err in errors:
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        err.pop("input", None)
        out.append(err)
    return out


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return validation errors as 400 with a user-friendly message for the first error."""
    errors = exc.errors()
    message = "Validation failed"
    if errors:
        first = errors[0]
        msg = first.get("msg", "Invalid input")
        loc = first.get("loc", ())
        if len(loc) >= 2:
            field = str(loc[-1])
            message = f"{field}: {msg}"
        else:
            message = msg
    logger.warning(
        "Request validation error: path=%s errors=%s",
        request.url.path,
        errors,
    )
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_errors(errors), "message": message},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exc()
    logger.exception("Unhandled exception: %s (path=%s)", exc, request.url.path)
    if settings.debug:
        return JSONResponse(status_code=500, content={"detail": str(exc), "traceback": tb})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health", status_code=200)
async def health_check(db=Depends(get_db)):
    """
    Deep health check with database connectivity.

    **Response:** {status: "ok"|"degraded", checks: {database: "ok"|"error: ..."}}
    """
    from sqlalchemy import text

    health: dict = {"status": "ok", "checks": {}}

    try:
        await db.execute(text("SELECT 1"))
        health["checks"]["database"] = "ok"
    except Exception as e:
        health["checks"]["database"] = f"error: {e}"
        health["status"] = "degraded"

    return health
