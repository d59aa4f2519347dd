from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, description="DHV-XC user name")
    password: str = Field(..., min_length=1, description="DHV-XC password")


class AuthResult(BaseModel):
    success: bool = Field(True, description="Operation success status")
    message: str = Field(..., description="Human readable outcome")


class AuthStatus(BaseModel):
    username: str = Field(..., description="Name of the logged in DHV-XC user")
    authenticated: bool = Field(True, description="Whether the session is valid")
