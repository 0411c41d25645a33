"""Listing and fetching statement documents through the authenticated session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from qander_scraper.http_session import PortalSession
from qander_scraper.parsers.statements import StatementRef, parse_statement_refs

logger = logging.getLogger(__name__)

STATEMENTS_PAGE_PATH = "/service/secure/statements.jsp"
PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class StatementDocument:
    file_name: str
    content: bytes = b""
    content_type: str = PDF_CONTENT_TYPE


def list_statements(session: PortalSession) -> List[StatementRef]:
    response = session.get(STATEMENTS_PAGE_PATH)
    refs = parse_statement_refs(response.text, url=response.url)
    logger.info("Found %d statement(s) on the statements page", len(refs))
    return refs


def download_statement(session: PortalSession, ref: StatementRef) -> StatementDocument:
    response = session.get(ref.download_path)
    logger.info("Downloaded %s (%d bytes)", ref.file_name, len(response.content))
    return StatementDocument(file_name=ref.file_name, content=response.content)


def download_statements(session: PortalSession, refs: Iterable[StatementRef]) -> List[StatementDocument]:
    """Fetch every ref in order; the first failure propagates."""
    return [download_statement(session, ref) for ref in refs]


__all__ = [
    "PDF_CONTENT_TYPE",
    "STATEMENTS_PAGE_PATH",
    "StatementDocument",
    "download_statement",
    "download_statements",
    "list_statements",
]
