"""Endpoint tokens embedded in the portal's login page.

The login page ships a script block along the lines of::

    'login': '/service/rest/v3/.../login',
    logout: '/service/rest/v3/.../logout',
    urlDone: '/service/secure/overview.jsp',
    recaptchaSitekey: '6Lc...'

The paths change per deployment, so they are read from the markup on every
run instead of being hardcoded.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Pattern

from qander_scraper.errors import ExtractionFailure


@dataclass(frozen=True)
class LoginTokens:
    login_path: str
    logout_path: str
    post_login_redirect: str
    anti_bot_key: str


def _literal_after(key: str) -> Pattern[str]:
    # Key may be bare or single-quoted but must not end a longer identifier.
    return re.compile(r"(?<![\w$.])'?" + re.escape(key) + r"'?\s*:\s*'([^']*)'")


# field name -> (markup key, pattern), in reporting order
LOGIN_TOKEN_PATTERNS: Dict[str, tuple[str, Pattern[str]]] = {
    "login_path": ("login", _literal_after("login")),
    "logout_path": ("logout", _literal_after("logout")),
    "post_login_redirect": ("urlDone", _literal_after("urlDone")),
    "anti_bot_key": ("recaptchaSitekey", _literal_after("recaptchaSitekey")),
}


def extract_login_tokens(body: str, url: Optional[str] = None) -> LoginTokens:
    values: Dict[str, str] = {}
    for field_name, (key, pattern) in LOGIN_TOKEN_PATTERNS.items():
        match = pattern.search(body)
        if match is None or not match.group(1):
            raise ExtractionFailure(key, url=url)
        values[field_name] = match.group(1)
    return LoginTokens(**values)


__all__ = ["LOGIN_TOKEN_PATTERNS", "LoginTokens", "extract_login_tokens"]
