"""Cookie-persisting HTTP session bound to the Qander portal.

Every request of a run goes through one ``PortalSession`` so the cookies set
by the login page and the login call are carried to the later requests.
"""
from __future__ import annotations

import json
import logging
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Optional

import requests
import tldextract

from qander_scraper.errors import TransportFailure

logger = logging.getLogger(__name__)

DEFAULT_SITE = "https://www.qander.nl"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)


# Bundled Public Suffix List snapshot, private section included (github.io,
# blogspot.com). Nothing is fetched at runtime.
_SUFFIX_LIST = tldextract.TLDExtract(suffix_list_urls=(), include_psl_private_domains=True)


def is_public_suffix(domain: str) -> bool:
    """True when ``domain`` (a leading dot is allowed) is itself a public suffix."""
    host = domain.strip(".").lower()
    if not host:
        return False
    parts = _SUFFIX_LIST(host)
    return not parts.domain and parts.suffix == host


class PublicSuffixCookiePolicy(DefaultCookiePolicy):
    """Stdlib cookie policy that also refuses Domain= cookies scoped to a public suffix.

    Host prefixes of Domain= cookies may not contain dots either.
    """

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("strict_ns_domain", DefaultCookiePolicy.DomainStrictNoDots)
        super().__init__(**kwargs)

    def set_ok_domain(self, cookie, request) -> bool:
        if cookie.domain_specified and is_public_suffix(cookie.domain):
            logger.debug("Refusing cookie %s scoped to public suffix %s", cookie.name, cookie.domain)
            return False
        return super().set_ok_domain(cookie, request)

    def return_ok_domain(self, cookie, request) -> bool:
        if cookie.domain_specified and is_public_suffix(cookie.domain):
            return False
        return super().return_ok_domain(cookie, request)


def _cookie_policy() -> DefaultCookiePolicy:
    return PublicSuffixCookiePolicy()


def new_requests_session(user_agent: Optional[str] = None) -> requests.Session:
    session = requests.Session()
    session.cookies.set_policy(_cookie_policy())
    session.headers["User-Agent"] = user_agent or DEFAULT_USER_AGENT
    return session


class PortalSession:
    """One logical browsing session against the portal."""

    def __init__(
        self,
        origin: str = DEFAULT_SITE,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.origin = origin.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else new_requests_session(user_agent)

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return self.origin + path

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self.url_for(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise TransportFailure(f"{method} failed: {exc}", url=url, status_code=status) from exc
        except requests.RequestException as exc:
            raise TransportFailure(f"{method} failed: {exc}", url=url) from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    def get(self, path: str) -> requests.Response:
        return self._request("GET", path)

    def post_json(self, path: str, payload: Any = None) -> requests.Response:
        """POST ``payload`` as JSON; ``None`` sends an empty body."""
        body = b"" if payload is None else json.dumps(payload).encode("utf-8")
        return self._request(
            "POST",
            path,
            data=body,
            headers={"Content-Type": "application/json"},
        )

    def cookie_names(self) -> list[str]:
        return sorted({cookie.name for cookie in self.session.cookies})

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "PortalSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "DEFAULT_SITE",
    "DEFAULT_USER_AGENT",
    "PortalSession",
    "PublicSuffixCookiePolicy",
    "is_public_suffix",
    "new_requests_session",
]
