import json

import pytest
import requests

from conftest import LOGIN_PATH, LOGOUT_PATH, FakeHttp
from qander_scraper.auth import Credentials, fetch_login_tokens, login, logout
from qander_scraper.errors import ExtractionFailure, TransportFailure
from qander_scraper.http_session import PortalSession


def test_credentials_payload_and_repr() -> None:
    creds = Credentials("me@example.com", "hunter2")
    assert creds.to_payload() == {
        "emailAddress": "me@example.com",
        "password": "hunter2",
        "reCaptchaResponse": None,
    }
    assert "hunter2" not in repr(creds)


def test_fetch_tokens_then_login_posts_json_to_extracted_path(portal: PortalSession, fake_http: FakeHttp) -> None:
    tokens = fetch_login_tokens(portal)
    assert tokens.login_path == LOGIN_PATH
    login(portal, Credentials("me@example.com", "hunter2"), tokens)

    method, path, kwargs = fake_http.calls[-1]
    assert (method, path) == ("POST", LOGIN_PATH)
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert json.loads(kwargs["data"]) == {
        "emailAddress": "me@example.com",
        "password": "hunter2",
        "reCaptchaResponse": None,
    }


def test_login_page_without_tokens_fails(portal: PortalSession, fake_http: FakeHttp) -> None:
    fake_http.add("GET", "/service/login.jsp", "<html>maintenance</html>")
    with pytest.raises(ExtractionFailure) as exc:
        fetch_login_tokens(portal)
    assert exc.value.field == "login"


def test_login_transport_error_is_fatal(portal: PortalSession, fake_http: FakeHttp) -> None:
    tokens = fetch_login_tokens(portal)
    fake_http.fail("POST", LOGIN_PATH, requests.ConnectionError("reset"))
    with pytest.raises(TransportFailure):
        login(portal, Credentials("me@example.com", "pw"), tokens)


def test_logout_posts_empty_body(portal: PortalSession, fake_http: FakeHttp) -> None:
    tokens = fetch_login_tokens(portal)
    logout(portal, tokens)
    method, path, kwargs = fake_http.calls[-1]
    assert (method, path, kwargs["data"]) == ("POST", LOGOUT_PATH, b"")
