from .login_page import LOGIN_TOKEN_PATTERNS, LoginTokens, extract_login_tokens
from .statements import STATEMENT_PATH_RE, StatementRef, parse_statement_refs

__all__ = [
    "LOGIN_TOKEN_PATTERNS",
    "LoginTokens",
    "STATEMENT_PATH_RE",
    "StatementRef",
    "extract_login_tokens",
    "parse_statement_refs",
]
