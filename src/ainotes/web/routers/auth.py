from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from ainotes.web.deps import AppDep, AuthTokenDep, ConfigDep, clear_auth_cookie, set_auth_cookie
from ainotes.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")


class SignUpRequest(BaseModel):
    """Registration request."""

    email: str = Field(..., description="Email address, used to sign in")
    password: str = Field(..., description="Password (at least 6 characters and at most 72 bytes, no whitespace)")
    name: str | None = Field(None, description="Display name (defaults to the part of the email before @)")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Authentication token for subsequent requests")


@router.post(
    "/auth/signup",
    summary="Register user",
    description="Create an account and receive an authentication token. New accounts start with a welcome note.",
    operation_id="signUp",
    status_code=201,
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Email taken, malformed, or password too weak"},
    },
)
async def sign_up(signup_data: SignUpRequest, app: AppDep, config: ConfigDep, response: Response) -> LoginResponse:
    token = await app.sign_up(signup_data.email, signup_data.password, signup_data.name)
    set_auth_cookie(response, token, config)
    return LoginResponse(token=token)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive an authentication token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, config: ConfigDep, response: Response) -> LoginResponse:
    """Authenticate user and create session."""
    token = await app.login(login_data.email, login_data.password)
    set_auth_cookie(response, token, config)
    return LoginResponse(token=token)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Invalidate the current authentication session.",
    operation_id="logout",
    status_code=204,
    responses={
        204: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, auth_token: AuthTokenDep, response: Response) -> None:
    await app.logout(auth_token)
    clear_auth_cookie(response)
