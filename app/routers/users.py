"""
User API endpoints for registration, login, logout and password recovery.
Sessions are carried in the `token` cookie, with the token also returned in the body.
"""

from fastapi import APIRouter, Depends, Response, status

from app.models.user import User
from app.services.auth import AuthService
from app.services.email import EmailService
from app.schemas.response import APIResponse
from app.schemas.auth import (
    LoginRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    AuthResponse
)
from app.schemas.user import UserRegister, UserResponse
from app.utils.auth import TokenService
from app.utils.dependencies import (
    get_auth_service,
    get_current_user,
    get_email_service,
    get_token_service
)
from app.utils.session import set_token_cookie, clear_token_cookie
from app.schemas.error import get_error_responses


router = APIRouter(prefix="/users", tags=["Users"])


def _auth_payload(user: User, token: str) -> AuthResponse:
    return AuthResponse(user=UserResponse.model_validate(user.to_dict()), token=token)


@router.post(
    "/register",
    response_model=APIResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Create a buyer or seller account and start a session",
    responses=get_error_responses(400, 500)
)
async def register(
    user_data: UserRegister,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    token_service: TokenService = Depends(get_token_service)
) -> APIResponse[AuthResponse]:
    """
    Register a new user.

    Every invalid field is reported at once; a taken email is rejected.
    """
    user, token = await auth_service.register(user_data.model_dump())
    set_token_cookie(response, token, token_service.max_age_seconds)

    return APIResponse.build(
        status.HTTP_201_CREATED,
        "User registered successfully",
        _auth_payload(user, token)
    )


@router.post(
    "/login",
    response_model=APIResponse[AuthResponse],
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with email and password; sets the session cookie",
    responses=get_error_responses(400, 404)
)
async def login(
    login_data: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    token_service: TokenService = Depends(get_token_service)
) -> APIResponse[AuthResponse]:
    """
    Authenticate user and open a session.

    Args:
        login_data: Login credentials (email and password)
        response: Outgoing response, receives the cookie
        auth_service: Authentication service
        token_service: Token issuer, provides the cookie lifetime

    Returns:
        Envelope with the user and the access token
    """
    user, token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )
    set_token_cookie(response, token, token_service.max_age_seconds)

    return APIResponse.build(
        status.HTTP_200_OK,
        "User logged in successfully",
        _auth_payload(user, token)
    )


@router.post(
    "/forgot-password",
    response_model=APIResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Forgot password",
    description="Email a freshly generated password to the account owner",
    responses=get_error_responses(400, 404, 500)
)
async def forgot_password(
    request_data: ForgotPasswordRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    email_service: EmailService = Depends(get_email_service)
) -> APIResponse[None]:
    """Replace the password with a generated one and mail it; ends the session."""
    await auth_service.forgot_password(request_data.email, email_service)
    clear_token_cookie(response)

    return APIResponse.build(status.HTTP_200_OK, "Password reset email sent successfully")


@router.put(
    "/reset-password",
    response_model=APIResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Reset password",
    description="Change the password after verifying the current one",
    responses=get_error_responses(400, 401, 404)
)
async def reset_password(
    request_data: ResetPasswordRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
) -> APIResponse[None]:
    await auth_service.reset_password(
        email=request_data.email,
        old_password=request_data.old_password,
        new_password=request_data.new_password
    )
    clear_token_cookie(response)

    return APIResponse.build(status.HTTP_200_OK, "Password reset successfully.")


@router.post(
    "/logout",
    response_model=APIResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Logout",
    description="Clear the session cookie"
)
async def logout(response: Response) -> APIResponse[None]:
    clear_token_cookie(response)
    return APIResponse.build(status.HTTP_200_OK, "User logged out successfully")


@router.get(
    "/me",
    response_model=APIResponse[UserResponse],
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    description="Get the authenticated user's profile",
    responses=get_error_responses(401)
)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
) -> APIResponse[UserResponse]:
    """
    Get current user information.

    Args:
        current_user: Current authenticated user

    Returns:
        Envelope with the user, without credentials
    """
    return APIResponse.build(
        status.HTTP_200_OK,
        "User fetched successfully.",
        UserResponse.model_validate(current_user.to_dict())
    )
