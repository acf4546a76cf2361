from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional

from app.schemas.user import UserRead


# -------------------------------------------------------------------
# LOGIN REQUEST
# -------------------------------------------------------------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


# -------------------------------------------------------------------
# REGISTER REQUEST (self sign-up, always a regular user)
# -------------------------------------------------------------------
class RegisterRequest(BaseModel):
    full_name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "full_name": "Ada Okafor",
                    "email": "ada@example.com",
                    "password": "password123",
                    "confirm_password": "password123"
                }
            ]
        }


# -------------------------------------------------------------------
# TOKEN + USER DETAILS (Used for login response)
# -------------------------------------------------------------------
class TokenWithUser(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: UserRead


# -------------------------------------------------------------------
# CHANGE PASSWORD
# -------------------------------------------------------------------
class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str = Field(min_length=6)
