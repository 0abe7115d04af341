"""Session cookie helpers"""
from typing import Optional

from starlette.requests import Request
from starlette.responses import Response

from chat_app.config import Settings


def read_session_token(request: Request, settings: Settings) -> Optional[str]:
    """Session token from the request cookie, or None when absent or empty"""
    return request.cookies.get(settings.session_cookie_name) or None


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session cookie for a freshly issued token"""
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
