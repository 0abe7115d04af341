"""Authentication module - GitHub OAuth and session cookie gate"""
from chat_app.auth.oauth import GitHubOAuth
from chat_app.auth.session import read_session_token, set_session_cookie
from chat_app.auth.gate import AuthGate, GateState, GateCheck, GateResult, advance

__all__ = [
    'GitHubOAuth',
    'read_session_token',
    'set_session_cookie',
    'AuthGate',
    'GateState',
    'GateCheck',
    'GateResult',
    'advance',
]
