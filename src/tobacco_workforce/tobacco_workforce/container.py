from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

from .core.constants import DEFAULT_DRAFT_TTL_HOURS, DRAFTS_FILENAME, PAY_RATES_FILENAME
from .database.connection import DBConfig, DatabaseConnection
from .drafts.store import DraftStore, JsonDraftStore
from .employees.cached_repository import CachedEmployeeRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.rates import JsonPayRateStore
from .payroll.service import PayrollReportService
from .schedules.cached_repository import CachedScheduleRepository
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .users.model import Account
from .users.mysql_account_repository import MySQLAccountRepository
from .users.repository import AccountRepository
from .users.service import AuthService
from .work_entries.cached_repository import CachedWorkEntryRepository
from .work_entries.mysql_work_entry_repository import MySQLWorkEntryRepository
from .work_entries.repository import WorkEntryRepository
from .work_entries.service import WorkEntryLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    accounts_repo: AccountRepository
    employees_repo: EmployeeRepository
    schedules_repo: ScheduleRepository
    work_entries_repo: WorkEntryRepository

    auth_service: AuthService
    employee_service: EmployeeService
    schedule_service: ScheduleService
    work_entry_ledger: WorkEntryLedger
    payroll_report_service: PayrollReportService


def wire_container(
    *,
    accounts_repo: AccountRepository,
    employees_repo: EmployeeRepository,
    schedules_repo: ScheduleRepository,
    work_entries_repo: WorkEntryRepository,
    rate_store: JsonPayRateStore,
    draft_store: Optional[DraftStore] = None,
    fallback_account: Optional[Account] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        conn=conn,
        accounts_repo=accounts_repo,
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        work_entries_repo=work_entries_repo,
        auth_service=AuthService(accounts_repo, fallback=fallback_account),
        employee_service=EmployeeService(employees_repo),
        schedule_service=ScheduleService(schedules_repo, work_entries_repo),
        work_entry_ledger=WorkEntryLedger(work_entries_repo, schedules_repo, draft_store),
        payroll_report_service=PayrollReportService(schedules_repo, work_entries_repo, employees_repo, rate_store),
    )


def build_container(
    *,
    db_config: dict,
    data_dir: str | Path,
    draft_ttl_hours: int = DEFAULT_DRAFT_TTL_HOURS,
    fallback_account: Optional[dict] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    data_dir = Path(data_dir)
    draft_store = JsonDraftStore(data_dir / DRAFTS_FILENAME, ttl=timedelta(hours=draft_ttl_hours))
    purged = draft_store.purge_expired()
    if purged:
        logger.info("Purged %d expired draft(s)", purged)

    return wire_container(
        conn=conn,
        accounts_repo=MySQLAccountRepository(conn),
        employees_repo=CachedEmployeeRepository(MySQLEmployeeRepository(conn)),
        schedules_repo=CachedScheduleRepository(MySQLScheduleRepository(conn)),
        work_entries_repo=CachedWorkEntryRepository(MySQLWorkEntryRepository(conn)),
        rate_store=JsonPayRateStore(data_dir / PAY_RATES_FILENAME),
        draft_store=draft_store,
        fallback_account=Account.from_settings(fallback_account),
    )
