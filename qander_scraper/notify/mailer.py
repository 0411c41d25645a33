"""Relay downloaded statements as e-mail attachments over SMTP."""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from qander_scraper.errors import AddressFormatFailure, NotificationFailure
from qander_scraper.scrape.download import StatementDocument

if TYPE_CHECKING:
    from qander_scraper.core.config_loader import RunConfig

logger = logging.getLogger(__name__)

DEFAULT_SMTP_PORT = 587
SMTPS_PORT = 465
SENDER = "Qander Automailer <nobody@polyware.nl>"
SUBJECT = "Uw rekeningoverzicht van Qander"
BODY = "Attached you will find the statements"


@dataclass(frozen=True)
class SmtpTarget:
    host: str
    port: int = DEFAULT_SMTP_PORT

    def __str__(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"


def _parse_port(address: str, raw: str) -> int:
    if not raw.isdigit():
        raise AddressFormatFailure(address, f"invalid port {raw!r}")
    port = int(raw)
    if not 0 < port < 65536:
        raise AddressFormatFailure(address, f"port {port} out of range")
    return port


def resolve_smtp_target(address: str) -> SmtpTarget:
    """Split ``host[:port]``, defaulting the port to 587.

    IPv6 literals must be bracketed, e.g. ``[::1]:25``.
    """
    address = (address or "").strip()
    if not address:
        raise AddressFormatFailure(address, "empty address")

    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise AddressFormatFailure(address, "missing ']' in address")
        host, rest = address[1:end], address[end + 1:]
        if not rest:
            port = DEFAULT_SMTP_PORT
        elif rest.startswith(":"):
            port = _parse_port(address, rest[1:])
        else:
            raise AddressFormatFailure(address, "unexpected text after ']'")
    elif "]" in address:
        raise AddressFormatFailure(address, "unexpected ']' in address")
    else:
        colons = address.count(":")
        if colons == 0:
            host, port = address, DEFAULT_SMTP_PORT
        elif colons == 1:
            host, raw_port = address.split(":")
            port = _parse_port(address, raw_port)
        else:
            raise AddressFormatFailure(address, "too many colons in address")

    if not host:
        raise AddressFormatFailure(address, "missing host")
    return SmtpTarget(host=host, port=port)


def parse_recipients(raw: str) -> List[str]:
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


def build_message(documents: Sequence[StatementDocument], recipients: Sequence[str]) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = SENDER
    msg["To"] = ", ".join(recipients)
    msg["Subject"] = SUBJECT
    msg.set_content(BODY)
    for document in documents:
        maintype, _, subtype = document.content_type.partition("/")
        msg.add_attachment(
            document.content,
            maintype=maintype,
            subtype=subtype,
            filename=document.file_name,
        )
    return msg


def send_message(
    msg: EmailMessage,
    target: SmtpTarget,
    username: Optional[str] = None,
    password: Optional[str] = None,
    timeout: Optional[float] = None,
) -> None:
    kwargs = {"timeout": timeout} if timeout else {}
    try:
        if target.port == SMTPS_PORT:
            with smtplib.SMTP_SSL(target.host, target.port, **kwargs) as server:
                if username:
                    server.login(username, password or "")
                server.send_message(msg)
        else:
            with smtplib.SMTP(target.host, target.port, **kwargs) as server:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()
                if username:
                    server.login(username, password or "")
                server.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        raise NotificationFailure(f"Sending mail via {target} failed: {exc}") from exc
    logger.info("Email sent to %s via %s (subject: %s)", msg["To"], target, msg["Subject"])


def notify(documents: Iterable[StatementDocument], config: "RunConfig") -> bool:
    """Mail ``documents`` in one message; returns False when there is nothing to send."""
    documents = list(documents)
    if not documents:
        logger.info("No statements to send")
        return False
    target = resolve_smtp_target(config.smtp)
    msg = build_message(documents, config.recipients)
    send_message(
        msg,
        target,
        username=config.smtp_user,
        password=config.smtp_pass,
        timeout=config.timeout,
    )
    return True


__all__ = [
    "BODY",
    "DEFAULT_SMTP_PORT",
    "SENDER",
    "SUBJECT",
    "SmtpTarget",
    "build_message",
    "notify",
    "parse_recipients",
    "resolve_smtp_target",
    "send_message",
]
