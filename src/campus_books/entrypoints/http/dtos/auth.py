from pydantic import BaseModel, ConfigDict, Field


class LoginRequestDTO(BaseModel):
    """Request payload for logging in."""

    email: str = Field(min_length=1, max_length=255, examples=["student@campus.edu"])
    password: str = Field(min_length=1, examples=["secret"])

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "student@campus.edu", "password": "secret"}}
    )


class UserDTO(BaseModel):
    user_id: str
    email: str
    first_name: str
    last_name: str
    role: str


class LoginResponseDTO(BaseModel):
    success: bool = True
    user: UserDTO


class CurrentUserResponseDTO(BaseModel):
    user: UserDTO


class LogoutResponseDTO(BaseModel):
    success: bool = True
