from pydantic import BaseModel, EmailStr


# -----------------------------------------------------
# LOGIN REQUEST (Supabase email/password)
# -----------------------------------------------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


# -----------------------------------------------------
# TOKEN RESPONSE (Supabase session JWT)
# -----------------------------------------------------
class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


class PasswordResetRequest(BaseModel):
    email: EmailStr
