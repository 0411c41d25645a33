"""Age policy applied to listed statements.

Each ref is classified on its own; a malformed or stale statement is skipped
without affecting the others.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional

from qander_scraper.parsers.statements import StatementRef

logger = logging.getLogger(__name__)

DATE_TOKEN_FORMAT = "%Y%m%d"


class OutcomeKind(str, Enum):
    INCLUDED = "INCLUDED"
    SKIPPED_STALE = "SKIPPED_STALE"
    SKIPPED_UNPARSEABLE = "SKIPPED_UNPARSEABLE"


@dataclass(frozen=True)
class StatementOutcome:
    kind: OutcomeKind
    ref: StatementRef
    issued: Optional[datetime] = None
    reason: str = ""

    @property
    def included(self) -> bool:
        return self.kind is OutcomeKind.INCLUDED


def parse_date_token(token: str) -> Optional[datetime]:
    """Local midnight, timezone-aware, for an 8-digit YYYYMMDD token, else None."""
    if len(token) != 8 or not token.isdigit():
        return None
    try:
        return datetime.strptime(token, DATE_TOKEN_FORMAT).astimezone()
    except (ValueError, OverflowError, OSError):
        return None


def classify_statement(ref: StatementRef, max_age_days: int, now: datetime) -> StatementOutcome:
    issued = parse_date_token(ref.date_token)
    if issued is None:
        return StatementOutcome(
            OutcomeKind.SKIPPED_UNPARSEABLE,
            ref,
            reason=f"unable to parse date {ref.date_token!r}",
        )
    if now.tzinfo is None:
        now = now.astimezone()
    # aware operands, so the difference is elapsed time across DST changes
    age = now - issued
    if max_age_days and age > timedelta(days=max_age_days):
        return StatementOutcome(
            OutcomeKind.SKIPPED_STALE,
            ref,
            issued=issued,
            reason=f"{age.days} days old, limit is {max_age_days}",
        )
    return StatementOutcome(OutcomeKind.INCLUDED, ref, issued=issued)


def filter_statements(
    refs: Iterable[StatementRef],
    max_age_days: int,
    now: Optional[datetime] = None,
) -> List[StatementOutcome]:
    now = now or datetime.now().astimezone()
    outcomes: List[StatementOutcome] = []
    for ref in refs:
        outcome = classify_statement(ref, max_age_days, now)
        if outcome.kind is OutcomeKind.SKIPPED_UNPARSEABLE:
            logger.warning("Statement %s/%s skipped: %s", ref.date_token, ref.opaque_hash, outcome.reason)
        elif outcome.kind is OutcomeKind.SKIPPED_STALE:
            logger.info("Statement %s too old, skipping (%s)", ref.date_token, outcome.reason)
        else:
            logger.debug("Statement %s/%s included", ref.date_token, ref.opaque_hash)
        outcomes.append(outcome)
    return outcomes


def included_refs(outcomes: Iterable[StatementOutcome]) -> List[StatementRef]:
    return [outcome.ref for outcome in outcomes if outcome.included]


__all__ = [
    "DATE_TOKEN_FORMAT",
    "OutcomeKind",
    "StatementOutcome",
    "classify_statement",
    "filter_statements",
    "included_refs",
    "parse_date_token",
]
