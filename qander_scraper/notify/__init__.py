from .mailer import (
    SmtpTarget,
    build_message,
    notify,
    parse_recipients,
    resolve_smtp_target,
    send_message,
)

__all__ = [
    "SmtpTarget",
    "build_message",
    "notify",
    "parse_recipients",
    "resolve_smtp_target",
    "send_message",
]
