# routers/auth.py

from fastapi import APIRouter, HTTPException, Depends, Request

from core.config import settings
from core.supabase_client import get_supabase_client, get_auth_client
from core.rate_limiter import require_rate_limit, get_rate_limit_identifier, get_client_ip
from dependencies.auth import get_current_user, CurrentUser
from core.logging_config import logger
from models.auth import LoginRequest, TokenResponse, PasswordResetRequest


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)

RESET_MESSAGE = "If an account exists with this email, a password reset link has been sent."


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate user")
def login(payload: LoginRequest):

    email = payload.email.strip().lower()

    client = get_auth_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": payload.password}
        )
    except Exception as e:
        # Don't tell the caller which half of the credentials was wrong
        logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
        raise HTTPException(
            status_code=401,
            detail="Invalid email or password"
        )

    session = response.session if response else None
    if not session or not session.access_token:
        raise HTTPException(401, "Invalid email or password")

    logger.info(f"Login: {email}")
    return TokenResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
    )


# ============================================================
# CURRENT USER
# ============================================================
@router.get("/me", response_model=CurrentUser, summary="Current authenticated user")
def read_me(current_user: CurrentUser = Depends(get_current_user)):
    return current_user


# ============================================================
# PASSWORD RESET
# ============================================================
@router.post(
    "/reset-password",
    summary="Send password reset email via Supabase",
    description="""
    Sends a password reset email. Rate limited to 5 requests per 15 minutes
    per email. Always answers with the same message so it cannot be used
    to find out which emails are registered.
    """,
    responses={
        200: {"description": "Email sent (or email not found)"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Internal server error"}
    }
)
def reset_password(payload: PasswordResetRequest, request: Request):
    email = payload.email.strip().lower()

    # 5 requests per 15 minutes per email
    identifier = get_rate_limit_identifier(request, user_id=email)
    require_rate_limit(request, identifier=identifier, max_requests=5, window_seconds=900)

    logger.info(f"Password reset attempt: email={email}, ip={get_client_ip(request)}")

    client = get_supabase_client()
    if not client:
        logger.error("Supabase not configured for password reset")
        raise HTTPException(500, "Service temporarily unavailable")

    redirect_to = f"{settings.APP_URL.rstrip('/')}/reset-password" if settings.APP_URL else None

    try:
        if redirect_to:
            client.auth.reset_password_for_email(email, {"redirect_to": redirect_to})
        else:
            client.auth.reset_password_for_email(email)
        logger.info(f"Password reset email sent: email={email}")
    except Exception as e:
        logger.error(f"Failed to send password reset email to {email}: {type(e).__name__}: {e}")

    return {"success": True, "message": RESET_MESSAGE}
