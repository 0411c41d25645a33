"""CLI entrypoint: fetch recent Qander statements and mail them."""

from __future__ import annotations

import argparse
import logging
from typing import Mapping, Optional, Sequence

from qander_scraper.core.config_loader import DEFAULT_TIMEOUT_S, RunConfig, load_env_defaults
from qander_scraper.core.log_setup import configure_logging
from qander_scraper.http_session import DEFAULT_SITE
from qander_scraper.notify.mailer import parse_recipients
from qander_scraper.scrape.runner import RunResult, run

logger = logging.getLogger("qander_scraper.cli")

REQUIRED = (("user", "--user"), ("password", "--pass"), ("smtp", "--smtp"), ("smtp_to", "--smtp_to"))


def build_parser(environ: Optional[Mapping[str, str]] = None) -> argparse.ArgumentParser:
    env = load_env_defaults(environ)
    parser = argparse.ArgumentParser(
        description="Download Qander account statements and mail them as PDF attachments",
    )
    parser.add_argument("--days", type=int, default=0, help="How old can the statement be before we skip it (days, 0 = no limit)")
    parser.add_argument("--all", action="store_true", help="Download all statements (currently always the case)")
    parser.add_argument("--user", default=env["user"], help="Qander username to log in with (required, env QANDER_USER)")
    parser.add_argument("--pass", dest="password", default=env["password"], help="Qander password to log in with (required, env QANDER_PASS)")
    parser.add_argument("--smtp", default="", help="SMTP server to send message over (e.g. smtp.iaf.nl:587) (required)")
    parser.add_argument("--smtp_user", default=env["smtp_user"], help="Optional SMTP username to log in with (env SMTP_USER)")
    parser.add_argument("--smtp_pass", default=env["smtp_pass"], help="Optional SMTP password to log in with (env SMTP_PASS)")
    parser.add_argument("--smtp_to", default="", help="Comma separated list of email recipients (required)")
    parser.add_argument("--site", default=env["site"] or DEFAULT_SITE, help="Portal origin (env QANDER_SITE)")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_S, help="Network timeout in seconds (0 = none)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def parse_args(argv: Sequence[str] | None = None, environ: Optional[Mapping[str, str]] = None) -> argparse.Namespace:
    parser = build_parser(environ)
    args = parser.parse_args(argv)
    missing = [flag for dest, flag in REQUIRED if not getattr(args, dest)]
    if missing:
        parser.error(f"One or more required flags are not given: {', '.join(missing)}")
    if not parse_recipients(args.smtp_to):
        parser.error("--smtp_to holds no recipients")
    if args.days < 0:
        parser.error("--days must not be negative")
    if args.timeout < 0:
        parser.error("--timeout must not be negative")
    return args


def report(result: RunResult) -> int:
    if result.primary is not None:
        logger.error("Run failed during %s: %s", result.failed_phase or "run", result.primary)
    if result.cleanup is not None:
        logger.error("Logout failed: %s", result.cleanup)
    if result.ok:
        logger.info("Done (%d statement(s) sent)", result.documents_sent)
        return 0
    return 1


def main(argv: Sequence[str] | None = None, environ: Optional[Mapping[str, str]] = None) -> int:
    args = parse_args(argv, environ)
    configure_logging(args.verbose)
    config = RunConfig.from_namespace(args)
    logger.debug("Config: %r", config)
    return report(run(config))


if __name__ == "__main__":
    raise SystemExit(main())


__all__ = ["build_parser", "main", "parse_args", "report"]
