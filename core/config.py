from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Society Connect API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Public URL of the web app (used for auth email redirects)
    APP_URL: Optional[str] = None

    # -------------------------------------------------
    # Frontend Domains
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (DB, Auth, Realtime)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------------------------------
    # Resource limits (mirror the dashboard widgets)
    # -------------------------------------------------
    VISITORS_FETCH_LIMIT: int = 50
    BOOKINGS_FETCH_LIMIT: int = 20
    ACTIVITY_FEED_LIMIT: int = 8

    # -------------------------------------------------
    # Pagination
    # -------------------------------------------------
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

# 1) the deployed web app
if settings.APP_URL:
    app_url = settings.APP_URL
    if not app_url.startswith("http"):
        app_url = f"https://{app_url}"
    cors_origins.append(app_url.rstrip("/"))

# 2) local / extra frontends
cors_origins.extend([d.rstrip("/") for d in settings.FRONTEND_DOMAINS])

# 3) remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
