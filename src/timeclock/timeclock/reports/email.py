from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass, field
from email.message import EmailMessage
from typing import Sequence

from ..core.exceptions import SinkFailure
from .model import DailyReport, WeeklyReport, punch_summary

logger = logging.getLogger(__name__)

_RULE = "=" * 50
_SEPARATOR = "-" * 30


def render_daily_text(report: DailyReport) -> str:
    lines = [f"DAILY REPORT - {report.day.isoformat()}", "", _RULE, ""]
    for entry in report.entries:
        summary = punch_summary(entry.punches)
        lines += [
            entry.employee.sort_name,
            f"Schedule: {entry.employee.schedule}",
            f"Punches: {summary or 'No punches'}",
            _SEPARATOR,
        ]
    return "\n".join(lines) + "\n"


def render_weekly_text(report: WeeklyReport) -> str:
    lines = [f"WEEKLY REPORT - {report.start.isoformat()} to {report.end.isoformat()}", "", _RULE, ""]
    for entry in report.entries:
        lines += [entry.employee.sort_name, f"Days worked: {entry.days_worked}"]
        for day in entry.days:
            summary = punch_summary(day.punches)
            lines.append(f"  {day.day.isoformat()}: {summary or 'No punches'}")
        lines.append(_SEPARATOR)
    return "\n".join(lines) + "\n"


def daily_subject(report: DailyReport) -> str:
    return f"Daily Punch Report - {report.day.isoformat()}"


def weekly_subject(report: WeeklyReport) -> str:
    return f"Weekly Punch Report - {report.start.isoformat()} to {report.end.isoformat()}"


@dataclass(frozen=True)
class SMTPConfig:
    host: str
    port: int = 587
    username: str = ""
    password: str = ""
    use_tls: bool = True
    sender: str = ""
    recipients: Sequence[str] = field(default_factory=tuple)
    timeout: float = 30.0


class SMTPReportMailer:
    """E-mail sink: sends rendered report text to the configured recipients."""

    def __init__(self, config: SMTPConfig):
        self._config = config

    def send(self, *, subject: str, body: str) -> None:
        cfg = self._config
        if not cfg.recipients:
            raise SinkFailure("No report recipients configured")

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = cfg.sender or cfg.username
        msg["To"] = ", ".join(cfg.recipients)
        msg.set_content(body)

        try:
            with smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout) as smtp:
                if cfg.use_tls:
                    smtp.starttls()
                if cfg.username:
                    smtp.login(cfg.username, cfg.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise SinkFailure(f"Could not send '{subject}': {e}") from e

        logger.info("Sent '%s' to %d recipient(s)", subject, len(cfg.recipients))
