"""Login handshake and session teardown against the portal."""

from __future__ import annotations

import logging

import requests

from qander_scraper.http_session import PortalSession
from qander_scraper.parsers.login_page import extract_login_tokens

from .types import Credentials, LoginTokens

logger = logging.getLogger(__name__)

LOGIN_PAGE_PATH = "/service/login.jsp"


def fetch_login_tokens(session: PortalSession) -> LoginTokens:
    """Load the login page and pull the endpoint tokens out of it.

    The page load also seeds the cookie jar with the pre-login session
    cookies that the login POST has to carry.
    """
    response = session.get(LOGIN_PAGE_PATH)
    tokens = extract_login_tokens(response.text, url=response.url)
    logger.info("Login page parsed (login=%s, logout=%s)", tokens.login_path, tokens.logout_path)
    logger.debug("urlDone=%s", tokens.post_login_redirect)
    logger.debug("Cookies after login page: %s", ", ".join(session.cookie_names()) or "<none>")
    return tokens


def login(session: PortalSession, credentials: Credentials, tokens: LoginTokens) -> requests.Response:
    # The response body is not inspected; the HTTP exchange completing with
    # a 2xx status is taken as success.
    response = session.post_json(tokens.login_path, credentials.to_payload())
    logger.info("Logged in as %s", credentials.identifier)
    logger.debug("Cookies after login: %s", ", ".join(session.cookie_names()) or "<none>")
    return response


def logout(session: PortalSession, tokens: LoginTokens) -> requests.Response:
    response = session.post_json(tokens.logout_path)
    logger.info("Logged out")
    return response


__all__ = ["LOGIN_PAGE_PATH", "fetch_login_tokens", "login", "logout"]
