from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pytest
import requests

from qander_scraper.http_session import PortalSession

SITE = "https://portal.example.test"
FIXTURES = Path(__file__).parent / "fixtures" / "pages"


def fixture_text(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


class FakeResponse:
    def __init__(self, url: str, status_code: int = 200, text: str = "", content: Optional[bytes] = None) -> None:
        self.url = url
        self.status_code = status_code
        self.text = text
        self.content = content if content is not None else text.encode("utf-8")

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}", response=self)


Route = Callable[[str, dict], FakeResponse]


class FakeHttp:
    """Stands in for ``requests.Session``; routes on (method, path)."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.calls: List[Tuple[str, str, dict]] = []
        self.closed = False
        self.cookies = requests.cookies.RequestsCookieJar()

    def add(self, method: str, path: str, text: str = "", status_code: int = 200, content: Optional[bytes] = None) -> None:
        def route(url: str, _kwargs: dict) -> FakeResponse:
            return FakeResponse(url, status_code=status_code, text=text, content=content)

        self.routes[(method, path)] = route

    def fail(self, method: str, path: str, exc: Exception) -> None:
        def route(_url: str, _kwargs: dict) -> FakeResponse:
            raise exc

        self.routes[(method, path)] = route

    def request(self, method: str, url: str, **kwargs) -> FakeResponse:
        path = url[len(SITE):] if url.startswith(SITE) else url
        self.calls.append((method, path, kwargs))
        route = self.routes.get((method, path))
        if route is None:
            return FakeResponse(url, status_code=404, text="not found")
        return route(url, kwargs)

    def paths(self, method: Optional[str] = None) -> List[str]:
        return [path for m, path, _ in self.calls if method is None or m == method]

    def close(self) -> None:
        self.closed = True


LOGIN_PATH = "/service/rest/v3/a91f0c/auth/login"
LOGOUT_PATH = "/service/rest/v3/a91f0c/auth/logout"


@pytest.fixture
def fake_http() -> FakeHttp:
    http = FakeHttp()
    http.add("GET", "/service/login.jsp", fixture_text("login.html"))
    http.add("POST", LOGIN_PATH, '{"result":"OK"}')
    http.add("GET", "/service/secure/statements.jsp", fixture_text("statements.html"))
    http.add("GET", "/service/rest/statements/20230101/abc/downloadPdf", content=b"%PDF-1.4 jan")
    http.add("GET", "/service/rest/statements/20230201/def/downloadPdf", content=b"%PDF-1.4 feb")
    http.add("POST", LOGOUT_PATH, "")
    return http


@pytest.fixture
def portal(fake_http: FakeHttp) -> PortalSession:
    return PortalSession(origin=SITE, session=fake_http)
