"""Authentication Pydantic schemas."""

from pydantic import BaseModel, Field


class OtpRequest(BaseModel):
    email: str = Field(..., min_length=3)


class OtpVerifyRequest(BaseModel):
    email: str = Field(..., min_length=3)
    otp: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    name: str | None = None
    phone_number: str | None = None


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class TokenData(BaseModel):
    token: str


class ProfileResponse(BaseModel):
    email: str
    name: str | None = None
    phone_number: str | None = None
