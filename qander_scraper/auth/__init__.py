from .types import Credentials, LoginTokens
from .login import LOGIN_PAGE_PATH, fetch_login_tokens, login, logout

__all__ = [
    "Credentials",
    "LOGIN_PAGE_PATH",
    "LoginTokens",
    "fetch_login_tokens",
    "login",
    "logout",
]
