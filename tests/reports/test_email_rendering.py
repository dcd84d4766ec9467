from datetime import date, datetime

import pytest

from timeclock.core.enums import PunchKind
from timeclock.core.exceptions import SinkFailure
from timeclock.employees.model import Employee
from timeclock.punches.model import PunchEvent
from timeclock.reports.email import (
    SMTPConfig,
    SMTPReportMailer,
    daily_subject,
    render_daily_text,
    render_weekly_text,
    weekly_subject,
)
from timeclock.reports.model import DailyEntry, DailyReport, WeeklyDay, WeeklyEntry, WeeklyReport

JUAN = Employee(employee_id=1, given_name="Juan", family_name="Perez", schedule="Monday to Friday 8:00-17:00")
MARIA = Employee(employee_id=2, given_name="Maria", family_name="Gonzalez", schedule="9:00-18:00")


def _punch(punch_id, kind, ts):
    return PunchEvent(punch_id=punch_id, employee_id=1, kind=PunchKind(kind), punched_at=ts)


def test_daily_text_lists_each_employee():
    report = DailyReport(
        day=date(2026, 2, 4),
        entries=[
            DailyEntry(employee=MARIA),
            DailyEntry(
                employee=JUAN,
                punches=[_punch(1, "in", datetime(2026, 2, 4, 8, 0)), _punch(2, "out", datetime(2026, 2, 4, 17, 0))],
            ),
        ],
    )

    text = render_daily_text(report)

    assert text.startswith("DAILY REPORT - 2026-02-04\n")
    assert "Gonzalez, Maria\nSchedule: 9:00-18:00\nPunches: No punches" in text
    assert "Perez, Juan\nSchedule: Monday to Friday 8:00-17:00\nPunches: in:08:00:00, out:17:00:00" in text
    assert daily_subject(report) == "Daily Punch Report - 2026-02-04"


def test_weekly_text_has_days_worked():
    report = WeeklyReport(
        start=date(2026, 2, 1),
        end=date(2026, 2, 7),
        entries=[
            WeeklyEntry(
                employee=JUAN,
                days=[WeeklyDay(day=date(2026, 2, 2), punches=[_punch(1, "in", datetime(2026, 2, 2, 8, 0))])],
            ),
            WeeklyEntry(employee=MARIA),
        ],
    )

    text = render_weekly_text(report)

    assert text.startswith("WEEKLY REPORT - 2026-02-01 to 2026-02-07\n")
    assert "Perez, Juan\nDays worked: 1\n  2026-02-02: in:08:00:00" in text
    assert "Gonzalez, Maria\nDays worked: 0\n" in text
    assert weekly_subject(report) == "Weekly Punch Report - 2026-02-01 to 2026-02-07"


def test_mailer_without_recipients_fails():
    mailer = SMTPReportMailer(SMTPConfig(host="localhost"))

    with pytest.raises(SinkFailure):
        mailer.send(subject="x", body="y")


def test_mailer_sends_message(monkeypatch):
    sent = []

    class FakeSMTP:
        def __init__(self, host, port, timeout):
            self.host = host

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def starttls(self):
            sent.append("tls")

        def login(self, username, password):
            sent.append(("login", username))

        def send_message(self, msg):
            sent.append(msg)

    monkeypatch.setattr("timeclock.reports.email.smtplib.SMTP", FakeSMTP)
    mailer = SMTPReportMailer(
        SMTPConfig(host="smtp.test", username="bot@test", password="pw", recipients=("boss@test", "hr@test"))
    )

    mailer.send(subject="Daily", body="hello")

    assert sent[0] == "tls"
    assert sent[1] == ("login", "bot@test")
    msg = sent[2]
    assert msg["To"] == "boss@test, hr@test"
    assert msg["From"] == "bot@test"
    assert msg.get_content().strip() == "hello"


def test_mailer_wraps_connection_errors(monkeypatch):
    def refuse(*args, **kwargs):
        raise ConnectionRefusedError("no server")

    monkeypatch.setattr("timeclock.reports.email.smtplib.SMTP", refuse)
    mailer = SMTPReportMailer(SMTPConfig(host="smtp.test", recipients=("boss@test",)))

    with pytest.raises(SinkFailure):
        mailer.send(subject="Daily", body="hello")
