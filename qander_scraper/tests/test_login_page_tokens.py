import unittest
from pathlib import Path

from qander_scraper.errors import ExtractionFailure
from qander_scraper.parsers.login_page import LoginTokens, extract_login_tokens


def _fixture_text(name: str) -> str:
    fixture_path = Path(__file__).parent / "fixtures" / "pages" / name
    return fixture_path.read_text(encoding="utf-8")


MINIMAL = (
    "'login': '/in', "
    "logout: '/out', "
    "urlDone: '/done', "
    "recaptchaSitekey: 'site-key'"
)


class LoginTokenExtractionTests(unittest.TestCase):
    def test_login_page_fixture_yields_all_four_values(self) -> None:
        tokens = extract_login_tokens(_fixture_text("login.html"))
        self.assertEqual(
            tokens,
            LoginTokens(
                login_path="/service/rest/v3/a91f0c/auth/login",
                logout_path="/service/rest/v3/a91f0c/auth/logout",
                post_login_redirect="/service/secure/overview.jsp",
                anti_bot_key="6LdQ7xQUAAAAAPc3a1Zk9y2b4m0sQv8fXrWnTt0e",
            ),
        )

    def test_minimal_body(self) -> None:
        tokens = extract_login_tokens(MINIMAL)
        self.assertEqual(tokens.login_path, "/in")
        self.assertEqual(tokens.logout_path, "/out")
        self.assertEqual(tokens.post_login_redirect, "/done")
        self.assertEqual(tokens.anti_bot_key, "site-key")

    def test_quoted_and_bare_keys_with_whitespace(self) -> None:
        body = "login  :   '/a'\n'logout'\t:'/b' 'urlDone': '/c' , 'recaptchaSitekey' : 'k'"
        tokens = extract_login_tokens(body)
        self.assertEqual((tokens.login_path, tokens.logout_path), ("/a", "/b"))
        self.assertEqual((tokens.post_login_redirect, tokens.anti_bot_key), ("/c", "k"))

    def test_each_missing_field_is_reported_by_name(self) -> None:
        cases = {
            "login": MINIMAL.replace("'login': '/in', ", ""),
            "logout": MINIMAL.replace("logout: '/out', ", ""),
            "urlDone": MINIMAL.replace("urlDone: '/done', ", ""),
            "recaptchaSitekey": MINIMAL.replace("recaptchaSitekey: 'site-key'", ""),
        }
        for field, body in cases.items():
            with self.subTest(field=field):
                with self.assertRaises(ExtractionFailure) as ctx:
                    extract_login_tokens(body)
                self.assertEqual(ctx.exception.field, field)
                self.assertIn(f"Unable to find '{field}'", str(ctx.exception))

    def test_empty_literal_counts_as_missing(self) -> None:
        with self.assertRaises(ExtractionFailure) as ctx:
            extract_login_tokens(MINIMAL.replace("'/out'", "''"))
        self.assertEqual(ctx.exception.field, "logout")

    def test_longer_identifiers_do_not_match(self) -> None:
        body = MINIMAL.replace("'login': '/in'", "relogin: '/in', autologin: '/x'")
        with self.assertRaises(ExtractionFailure) as ctx:
            extract_login_tokens(body)
        self.assertEqual(ctx.exception.field, "login")

    def test_double_quoted_literal_is_not_accepted(self) -> None:
        with self.assertRaises(ExtractionFailure):
            extract_login_tokens(MINIMAL.replace("urlDone: '/done'", 'urlDone: "/done"'))


if __name__ == "__main__":
    unittest.main()
