"""Phase pipeline for one statement run.

extract tokens -> login -> list -> filter -> download -> notify -> logout

A failure before login ends the run with nothing to undo. Once the login
went through, logout is always attempted; its own failure is kept in a
separate slot so it never hides the error that was already in flight.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from qander_scraper.auth.login import fetch_login_tokens, login, logout
from qander_scraper.core.config_loader import RunConfig
from qander_scraper.errors import QanderError
from qander_scraper.http_session import PortalSession
from qander_scraper.notify.mailer import notify as send_statements
from qander_scraper.scrape.download import StatementDocument, download_statements, list_statements
from qander_scraper.scrape.filtering import StatementOutcome, filter_statements, included_refs

logger = logging.getLogger(__name__)

Notifier = Callable[[Sequence[StatementDocument], RunConfig], bool]


@dataclass
class RunResult:
    primary: Optional[QanderError] = None
    cleanup: Optional[QanderError] = None
    authenticated: bool = False
    logged_out: bool = False
    outcomes: List[StatementOutcome] = field(default_factory=list)
    documents_sent: int = 0
    failed_phase: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.primary is None and self.cleanup is None


def _process_statements(
    session: PortalSession,
    config: RunConfig,
    now: datetime,
    notifier: Notifier,
    result: RunResult,
) -> None:
    result.failed_phase = "list"
    refs = list_statements(session)
    if config.all_statements:
        logger.debug("--all given; every listed statement is considered")

    result.failed_phase = "filter"
    result.outcomes = filter_statements(refs, config.max_age_days, now)
    survivors = included_refs(result.outcomes)
    logger.info("%d of %d statement(s) pass the age filter", len(survivors), len(refs))

    result.failed_phase = "download"
    documents = download_statements(session, survivors)

    result.failed_phase = "notify"
    if notifier(documents, config):
        result.documents_sent = len(documents)
    result.failed_phase = None


def run(
    config: RunConfig,
    session: Optional[PortalSession] = None,
    now: Optional[datetime] = None,
    notifier: Notifier = send_statements,
) -> RunResult:
    owns_session = session is None
    if session is None:
        session = PortalSession(origin=config.site, timeout=config.timeout)
    result = RunResult()
    try:
        try:
            result.failed_phase = "extract"
            tokens = fetch_login_tokens(session)
            result.failed_phase = "login"
            login(session, config.credentials, tokens)
        except QanderError as exc:
            result.primary = exc
            return result
        result.authenticated = True

        try:
            _process_statements(session, config, now or datetime.now(), notifier, result)
        except QanderError as exc:
            result.primary = exc
        finally:
            try:
                logout(session, tokens)
                result.logged_out = True
            except QanderError as exc:
                result.cleanup = exc
        return result
    finally:
        if owns_session:
            session.close()


__all__ = ["Notifier", "RunResult", "run"]
