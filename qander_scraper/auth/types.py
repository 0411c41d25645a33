from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from qander_scraper.parsers.login_page import LoginTokens


@dataclass(frozen=True)
class Credentials:
    identifier: str
    secret: str = field(repr=False)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "emailAddress": self.identifier,
            "password": self.secret,
            "reCaptchaResponse": None,
        }


__all__ = ["Credentials", "LoginTokens"]
