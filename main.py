import os
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Ensure local imports resolve
sys.path.append(os.path.dirname(__file__))

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.errors import NoSocietyError
from core.logging_config import logger

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers.auth import router as auth_router
from routers.members import router as members_router
from routers.amenities import router as amenities_router
from routers.visitors import router as visitors_router
from routers.events import router as events_router
from routers.maintenance import router as maintenance_router
from routers.announcements import router as announcements_router
from routers.dashboard import router as dashboard_router
from routers.houses import router as houses_router
from routers.roles import router as roles_router
from routers.societies import router as societies_router
from routers.live import router as live_router
from routers.health import router as health_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Society Connect API: Supabase-powered residential society management",
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup: refuse to run without Supabase credentials
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info("🚀 Starting Society Connect API")
        validate_config_on_startup()
        for route in app.routes:
            methods = ",".join(getattr(route, "methods", None) or ["WS"])
            logger.debug(f"Route {methods:10s} {route.path}")

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url}: {exc.detail}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(NoSocietyError)
    async def handle_no_society(request: Request, exc: NoSocietyError):
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------

    # Auth
    app.include_router(auth_router)

    # Society resources
    app.include_router(members_router)
    app.include_router(amenities_router)
    app.include_router(visitors_router)
    app.include_router(events_router)
    app.include_router(maintenance_router)
    app.include_router(announcements_router)
    app.include_router(dashboard_router)
    app.include_router(houses_router)
    app.include_router(roles_router)
    app.include_router(societies_router)

    # Realtime
    app.include_router(live_router)

    # Health
    app.include_router(health_router)

    return app


# Create the global FastAPI instance
app = create_app()
