"""Configuration and environment resolution for a scraper run."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from qander_scraper.auth.types import Credentials
from qander_scraper.http_session import DEFAULT_SITE
from qander_scraper.notify.mailer import parse_recipients

DEFAULT_TIMEOUT_S = 60.0

# flag dest -> environment variable used when the flag is not given
ENV_FALLBACKS = {
    "user": "QANDER_USER",
    "password": "QANDER_PASS",
    "smtp_user": "SMTP_USER",
    "smtp_pass": "SMTP_PASS",
    "site": "QANDER_SITE",
}


def load_env_defaults(environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    env = os.environ if environ is None else environ
    return {dest: env.get(name, "") for dest, name in ENV_FALLBACKS.items()}


@dataclass(frozen=True)
class RunConfig:
    username: str
    password: str
    smtp: str
    recipients: Tuple[str, ...]
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None
    max_age_days: int = 0
    all_statements: bool = False
    site: str = DEFAULT_SITE
    timeout: Optional[float] = DEFAULT_TIMEOUT_S

    @property
    def credentials(self) -> Credentials:
        return Credentials(identifier=self.username, secret=self.password)

    def __repr__(self) -> str:
        return (
            f"RunConfig(username={self.username!r}, smtp={self.smtp!r}, "
            f"recipients={self.recipients!r}, max_age_days={self.max_age_days}, site={self.site!r})"
        )

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "RunConfig":
        timeout = float(args.timeout) if args.timeout else None
        return cls(
            username=args.user,
            password=args.password,
            smtp=args.smtp,
            recipients=tuple(parse_recipients(args.smtp_to)),
            smtp_user=args.smtp_user or None,
            smtp_pass=args.smtp_pass or None,
            max_age_days=int(args.days),
            all_statements=bool(args.all),
            site=args.site or DEFAULT_SITE,
            timeout=timeout,
        )


__all__ = ["DEFAULT_TIMEOUT_S", "ENV_FALLBACKS", "RunConfig", "load_env_defaults"]
