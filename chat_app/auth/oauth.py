"""GitHub OAuth provider"""
import asyncio
import logging
from typing import Optional
from urllib.parse import urlencode

import aiohttp
from pydantic import ValidationError

from chat_app.config import Settings
from chat_app.schemas import ExternalIdentity, TokenDenied, TokenGranted, TokenResponse

logger = logging.getLogger(__name__)


class GitHubOAuth:
    """Code-for-token exchange and token-for-identity lookup against GitHub"""

    def __init__(self, settings: Settings):
        self.client_id = settings.github_client_id
        self.client_secret = settings.github_client_secret
        self.oauth_url = settings.github_oauth_url.rstrip('/')
        self.api_url = settings.github_api_url.rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=settings.http_timeout_seconds)

    def get_auth_url(self) -> str:
        """Get GitHub authorization URL"""
        query = urlencode({'client_id': self.client_id or ''})
        return f"{self.oauth_url}/login/oauth/authorize?{query}"

    async def exchange_code_for_token(self, code: str) -> TokenResponse:
        """Exchange authorization code for an access token.

        Never raises: provider errors, malformed payloads and network failures
        all come back as TokenDenied.
        """
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(
                    f"{self.oauth_url}/login/oauth/access_token",
                    json={
                        'client_id': self.client_id,
                        'client_secret': self.client_secret,
                        'code': code,
                    },
                    headers={
                        'Accept': 'application/json',
                        'Content-Type': 'application/json',
                    },
                ) as resp:
                    data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Error exchanging GitHub code: {e}")
            return TokenDenied(error=str(e) or type(e).__name__)

        if not isinstance(data, dict):
            logger.warning(f"Unexpected GitHub token response: {data!r}")
            return TokenDenied(error="invalid_response")

        access_token = data.get('access_token')
        if not access_token:
            error = data.get('error') or "missing_access_token"
            logger.warning(f"GitHub OAuth error: {error}")
            return TokenDenied(error=error)

        return TokenGranted(access_token=access_token)

    async def get_user_info(self, token: str) -> Optional[ExternalIdentity]:
        """Get GitHub identity for a token, or None if it cannot be resolved"""
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(
                    f"{self.api_url}/user",
                    headers={
                        'Authorization': f'token {token}',
                        'Accept': 'application/json',
                    },
                ) as resp:
                    data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Error getting GitHub user info: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Unexpected GitHub user response: {data!r}")
            return None

        try:
            return ExternalIdentity(
                login=data.get('login'),
                id=data.get('id'),
                avatar_url=data.get('avatar_url'),
            )
        except ValidationError as e:
            logger.warning(f"Incomplete GitHub user info: {e}")
            return None
