import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from leave_management.core.config import settings
from leave_management.core.exceptions import LeaveManagementError

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("leave_management")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: make sure the default leave types exist
    if settings.SEED_DEFAULT_LEAVE_TYPES:
        from leave_management.core.database import async_session_factory
        from leave_management.repositories import UnitOfWork
        from leave_management.services.leave_types import LeaveTypeRegistry

        async with async_session_factory() as db:
            await LeaveTypeRegistry(UnitOfWork(db)).initialize_defaults()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error handlers ────────────────────────────────────────────────────────────
# Every error leaves the API as {"message": "..."}.


@app.exception_handler(LeaveManagementError)
async def domain_error_handler(request: Request, exc: LeaveManagementError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": f"{field}: {message}" if field else message},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "An error occurred while processing your request"},
    )


# ── Routers ───────────────────────────────────────────────────────────────────
from leave_management.api.v1.auth import router as auth_router  # noqa: E402
from leave_management.api.v1.leave import router as leave_router  # noqa: E402
from leave_management.api.v1.manager import router as manager_router  # noqa: E402
from leave_management.api.v1.dashboard import router as dashboard_router  # noqa: E402
from leave_management.api.v1.admin import router as admin_router  # noqa: E402
from leave_management.api.v1.system_settings import router as settings_router  # noqa: E402
from leave_management.api.v1.profile import router as profile_router  # noqa: E402

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(leave_router, prefix=settings.API_PREFIX)
app.include_router(manager_router, prefix=settings.API_PREFIX)
app.include_router(dashboard_router, prefix=settings.API_PREFIX)
app.include_router(admin_router, prefix=settings.API_PREFIX)
app.include_router(settings_router, prefix=settings.API_PREFIX)
app.include_router(profile_router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.APP_NAME}
