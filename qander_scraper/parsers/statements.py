"""Statement download references embedded in the statements page."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from qander_scraper.errors import ExtractionFailure

# e.g. /service/rest/statements/20170919/10594766/downloadPdf
STATEMENT_PATH_RE = re.compile(
    r"/service/rest/statements/(?P<date>[^/'\"\s<>]+)/(?P<hash>[^/'\"\s<>]+)/downloadPdf"
)


@dataclass(frozen=True)
class StatementRef:
    date_token: str
    opaque_hash: str
    download_path: str

    @property
    def file_name(self) -> str:
        return f"statement-{self.date_token}"


def parse_statement_refs(body: str, url: Optional[str] = None) -> List[StatementRef]:
    """Return one ref per distinct (date, hash) pair, first occurrence first."""
    refs: List[StatementRef] = []
    seen: set[tuple[str, str]] = set()
    for match in STATEMENT_PATH_RE.finditer(body):
        key = (match.group("date"), match.group("hash"))
        if key in seen:
            continue
        seen.add(key)
        refs.append(StatementRef(date_token=key[0], opaque_hash=key[1], download_path=match.group(0)))
    if not refs:
        raise ExtractionFailure("statements", url=url)
    return refs


__all__ = ["STATEMENT_PATH_RE", "StatementRef", "parse_statement_refs"]
