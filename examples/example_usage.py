"""Example: use the service layer directly (no Flask).

Prints last week's payroll using the configured database and local pay rates.
"""

import importlib
from datetime import timedelta

from config import get_settings_module

from src.tobacco_workforce.tobacco_workforce.common.datetime_utils import now_local
from src.tobacco_workforce.tobacco_workforce.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, data_dir=settings.DATA_DIR)

    end = now_local().date()
    report = container.payroll_report_service.build_payroll(start=end - timedelta(days=6), end=end)
    for employee in report.employees:
        print(f"{employee.full_name:<30} {employee.total_amount:>10.2f}")
    print(f"{'Total':<30} {report.grand_total:>10.2f}")


if __name__ == "__main__":
    main()
