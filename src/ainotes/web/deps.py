"""Request dependencies: the application facade, config and the caller's session token.

A token is accepted from the `Authorization: Bearer` header or from the
`auth_token` cookie set by the auth routes. The header wins when both are
present and valid.
"""

from datetime import timedelta
from typing import Annotated, cast

from fastapi import Depends, Request, Response
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from ainotes.app import App
from ainotes.config import Config
from ainotes.core.modules.session.models import AuthToken
from ainotes.errors import AuthenticationError

AUTH_COOKIE_NAME = "auth_token"

bearer_scheme = HTTPBearer(
    scheme_name="BearerAuth",
    description="Session token from `signUp` or `login` (preferred)",
    auto_error=False,
)
cookie_scheme = APIKeyCookie(
    name=AUTH_COOKIE_NAME,
    scheme_name="AuthTokenCookie",
    description="Session token cookie set by `signUp` and `login`",
    auto_error=False,
)


def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]


async def get_auth_token(
    app: AppDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    cookie_token: Annotated[str | None, Depends(cookie_scheme)],
) -> AuthToken:
    """Return the first valid session token the request carries."""
    candidates = [credentials.credentials if credentials else None, cookie_token]
    for candidate in candidates:
        if candidate and await app.is_auth_token_valid(AuthToken(candidate)):
            return AuthToken(candidate)
    raise AuthenticationError("Invalid or expired session")


AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]


def set_auth_cookie(response: Response, token: AuthToken, config: Config) -> None:
    """Store the session token in an http-only cookie living as long as the session."""
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=int(timedelta(days=config.session_ttl_days).total_seconds()),
        httponly=True,
        samesite="lax",
        secure=config.secure_cookies,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE_NAME)
