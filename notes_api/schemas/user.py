"""
Notes API — User Request/Response Schemas
"""

from pydantic import BaseModel, Field

from notes_api.models.user import USERNAME_MAX_LENGTH


class CredentialsRequest(BaseModel):
    """Body of POST /api/users/register and POST /api/users/login."""
    username: str = Field(
        max_length=USERNAME_MAX_LENGTH, description="Account name (non-empty, unique)"
    )
    password: str = Field(description="Plaintext password; hashed before storage")


class RegisterResponse(BaseModel):
    id: int = Field(description="Generated user identifier")
    username: str


class TokenResponse(BaseModel):
    """Returned by a successful login."""
    token: str = Field(description="Signed bearer token, valid for one hour")
