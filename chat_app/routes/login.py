"""Login page and GitHub login redirect"""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse, Response

from chat_app.auth import AuthGate, GitHubOAuth
from chat_app.dependencies import get_auth_gate, get_oauth_provider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["login"])


@router.get("/", include_in_schema=False)
@router.get("/login-page")
async def login_page(request: Request, gate: AuthGate = Depends(get_auth_gate)) -> Response:
    """Room list for a valid session or OAuth callback, login button otherwise"""
    return await gate.handle(request)


@router.get("/api/login")
async def github_login(oauth: GitHubOAuth = Depends(get_oauth_provider)):
    """Redirect to GitHub authorization"""
    return RedirectResponse(url=oauth.get_auth_url(), status_code=302)
