from pydantic import BaseModel


class UserBase(BaseModel):
    """Base user schema."""
    email: str | None = None
    name: str | None = None
    picture: str | None = None


class GoogleProfile(UserBase):
    """Profile returned by the Google userinfo endpoint."""
    id: str
    verified_email: bool | None = None
    given_name: str | None = None
    family_name: str | None = None
    locale: str | None = None


class UserResponse(UserBase):
    """User response schema."""
    id: str
    ads_removed: bool

    class Config:
        from_attributes = True


class AuthUrlResponse(BaseModel):
    """Authorization URL for the login popup."""
    url: str
