"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; attendance rules live in the services.
"""

import importlib
import json
from datetime import timedelta

from config import get_settings_module

from timeclock.common.datetime_utils import business_today
from timeclock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        smtp_config=settings.SMTP_CONFIG,
        report_timezone=settings.REPORT_TIMEZONE,
        report_timeout_seconds=settings.REPORT_TICK_TIMEOUT_SECONDS,
    )
    today = business_today()
    report = container.report_aggregator.all_employees_range(today - timedelta(days=6), today)
    print(json.dumps(report.to_dict(), indent=2))


if __name__ == "__main__":
    main()
