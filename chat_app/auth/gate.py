"""Login gate: session cookie check, GitHub OAuth completion, room list payload"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from starlette.datastructures import URL
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from chat_app.auth.oauth import GitHubOAuth
from chat_app.auth.session import read_session_token, set_session_cookie
from chat_app.config import Settings
from chat_app.exceptions import StoreReadError, StoreWriteError
from chat_app.repositories import RoomRepository, UserRepository
from chat_app.schemas import AuthOutcome, TokenGranted
from chat_app.web.pages import render_page

logger = logging.getLogger(__name__)

PageRenderer = Callable[[Union[AuthOutcome, bool, None], URL], Response]


class GateState(str, enum.Enum):
    NO_SESSION = "no_session"
    PENDING_CALLBACK = "pending_callback"
    AUTHENTICATED = "authenticated"
    LOGIN_FAILED = "login_failed"


class GateCheck(str, enum.Enum):
    SESSION_VALID = "session_valid"
    CODE_PRESENT = "code_present"
    TOKEN_PRESENT = "token_present"
    IDENTITY_RESOLVED = "identity_resolved"


_TRANSITIONS = {
    (GateState.NO_SESSION, GateCheck.SESSION_VALID, True): GateState.AUTHENTICATED,
    (GateState.NO_SESSION, GateCheck.SESSION_VALID, False): GateState.NO_SESSION,
    (GateState.NO_SESSION, GateCheck.CODE_PRESENT, True): GateState.PENDING_CALLBACK,
    (GateState.NO_SESSION, GateCheck.CODE_PRESENT, False): GateState.NO_SESSION,
    (GateState.PENDING_CALLBACK, GateCheck.TOKEN_PRESENT, True): GateState.PENDING_CALLBACK,
    (GateState.PENDING_CALLBACK, GateCheck.TOKEN_PRESENT, False): GateState.LOGIN_FAILED,
    (GateState.PENDING_CALLBACK, GateCheck.IDENTITY_RESOLVED, True): GateState.AUTHENTICATED,
    (GateState.PENDING_CALLBACK, GateCheck.IDENTITY_RESOLVED, False): GateState.LOGIN_FAILED,
}


def advance(state: GateState, check: GateCheck, passed: bool) -> GateState:
    """Next gate state after running `check` in `state`"""
    try:
        return _TRANSITIONS[(state, check, passed)]
    except KeyError:
        raise ValueError(f"Check {check.value} is not valid in state {state.value}") from None


@dataclass
class GateResult:
    state: GateState
    outcome: Union[AuthOutcome, bool]
    issued_token: Optional[str] = None


class AuthGate:
    """Decides whether a request is authenticated and builds the page payload.

    Session store failures become a plain-text 400 carrying the store message.
    Room catalog failures are not handled here and propagate to the caller.
    A cookie that matches no user is left in place; the request then falls
    through to OAuth callback handling like a request without a cookie.
    """

    def __init__(
        self,
        settings: Settings,
        users: UserRepository,
        rooms: RoomRepository,
        oauth: GitHubOAuth,
        renderer: PageRenderer = render_page,
    ):
        self.settings = settings
        self.users = users
        self.rooms = rooms
        self.oauth = oauth
        self.renderer = renderer

    async def handle(self, request: Request) -> Response:
        try:
            result = await self.resolve(request)
        except (StoreReadError, StoreWriteError) as e:
            logger.error(f"Session store error: {e.message}")
            return PlainTextResponse(e.message, status_code=400)

        response = self.renderer(result.outcome, request.url)
        if result.issued_token is not None:
            set_session_cookie(response, result.issued_token, self.settings)
        return response

    async def resolve(self, request: Request) -> GateResult:
        token = read_session_token(request, self.settings)
        state = GateState.NO_SESSION
        if token:
            state = advance(state, GateCheck.SESSION_VALID, await self.session_exists(token))
            if state is GateState.AUTHENTICATED:
                return GateResult(state, await self.load_outcome())
            logger.info("Session cookie matches no user, checking for OAuth callback")

        code = request.query_params.get('code')
        state = advance(state, GateCheck.CODE_PRESENT, bool(code))
        if state is GateState.NO_SESSION:
            return GateResult(state, False)

        return await self.complete_callback(code)

    async def session_exists(self, token: str) -> bool:
        rows = await self.users.find_by_access_token(token)
        return len(rows) > 0

    async def complete_callback(self, code: str) -> GateResult:
        """Exchange the code, store the identity and issue the session token"""
        state = GateState.PENDING_CALLBACK
        token_response = await self.oauth.exchange_code_for_token(code)
        state = advance(state, GateCheck.TOKEN_PRESENT, isinstance(token_response, TokenGranted))
        if state is GateState.LOGIN_FAILED:
            logger.warning(f"GitHub returned no access token: {token_response.error}")
            return GateResult(state, False)

        access_token = token_response.access_token
        identity = await self.oauth.get_user_info(access_token)
        state = advance(state, GateCheck.IDENTITY_RESOLVED, identity is not None)
        if state is GateState.LOGIN_FAILED:
            logger.warning("GitHub identity lookup failed, rendering logged-out page")
            return GateResult(state, False)

        await self.users.upsert(identity, access_token)
        logger.info(f"User {identity.login} logged in")
        return GateResult(state, await self.load_outcome(), issued_token=access_token)

    async def load_outcome(self) -> AuthOutcome:
        return AuthOutcome(rooms=await self.rooms.list_with_activity())
