from fastapi import APIRouter, Depends, Request

from campus_books.domain.user import AuthenticatedUser
from campus_books.entrypoints.http.dependencies import (
    SESSION_USER_KEY,
    get_authenticate_user_use_case,
    get_current_user,
)
from campus_books.entrypoints.http.dtos.auth import (
    CurrentUserResponseDTO,
    LoginRequestDTO,
    LoginResponseDTO,
    LogoutResponseDTO,
)
from campus_books.entrypoints.http.error_responses import ERROR_RESPONSES
from campus_books.entrypoints.http.mappers.auth_mapper import AuthMapper
from campus_books.use_cases.authenticate_user import AuthenticateUser, AuthenticateUserRequest

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponseDTO,
    summary="Log in",
    responses={400: ERROR_RESPONSES[400], 401: ERROR_RESPONSES[401]},
)
def login(
    payload: LoginRequestDTO,
    request: Request,
    use_case: AuthenticateUser = Depends(get_authenticate_user_use_case),
) -> LoginResponseDTO:
    user = use_case.execute(
        AuthenticateUserRequest(email=payload.email, password=payload.password)
    )

    # Start a fresh session so nothing from an earlier login survives
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.user_id

    return LoginResponseDTO(user=AuthMapper.to_user_dto(user))


@router.get(
    "/user",
    response_model=CurrentUserResponseDTO,
    summary="Current user",
    responses={401: ERROR_RESPONSES[401]},
)
def current_user(user: AuthenticatedUser = Depends(get_current_user)) -> CurrentUserResponseDTO:
    return CurrentUserResponseDTO(user=AuthMapper.to_user_dto(user))


@router.post("/logout", response_model=LogoutResponseDTO, summary="Log out")
def logout(request: Request) -> LogoutResponseDTO:
    request.session.clear()
    return LogoutResponseDTO()
