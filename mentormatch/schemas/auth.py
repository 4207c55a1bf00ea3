from pydantic import BaseModel, EmailStr, Field
from typing import Optional

# ======================
# TOKEN SCHEMAS
# ======================

class Token(BaseModel):
    access_token: str
    token_type: str
    role: str

class TokenData(BaseModel):
    email: Optional[str] = None
    role: Optional[str] = None


# ======================
# USER AUTHENTICATION SCHEMAS
# ======================

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    # Bcrypt has a 72-byte limit.
    password: str = Field(..., min_length=6, max_length=72)
    about: Optional[str] = Field(None, max_length=2000)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str
