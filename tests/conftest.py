from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta

import pytest
from werkzeug.security import generate_password_hash

from src.tobacco_workforce.tobacco_workforce.container import wire_container
from src.tobacco_workforce.tobacco_workforce.core.enums import Role
from src.tobacco_workforce.tobacco_workforce.core.exceptions import BackendError
from src.tobacco_workforce.tobacco_workforce.drafts.store import JsonDraftStore
from src.tobacco_workforce.tobacco_workforce.employees.model import Employee
from src.tobacco_workforce.tobacco_workforce.main import create_app
from src.tobacco_workforce.tobacco_workforce.payroll.rates import JsonPayRateStore
from src.tobacco_workforce.tobacco_workforce.schedules.model import Schedule, ScheduleItem
from src.tobacco_workforce.tobacco_workforce.schedules.service import ScheduleService
from src.tobacco_workforce.tobacco_workforce.users.model import Account
from src.tobacco_workforce.tobacco_workforce.work_entries.model import WorkEntry
from src.tobacco_workforce.tobacco_workforce.work_entries.service import WorkEntryLedger

NOW = datetime(2026, 3, 2, 9, 30)


class FakeEmployeeRepo:
    def __init__(self, employees=()):
        self.items = {e.employee_id: e for e in employees}

    def list_all(self):
        return list(self.items.values())

    def get_by_id(self, employee_id):
        return self.items.get(employee_id)

    def create(self, employee):
        self.items[employee.employee_id] = employee

    def update(self, employee):
        if employee.employee_id not in self.items:
            return False
        self.items[employee.employee_id] = employee
        return True

    def delete_by_id(self, employee_id):
        return self.items.pop(employee_id, None) is not None


class FakeScheduleRepo:
    def __init__(self, schedules=()):
        self.items = {s.schedule_id: s for s in schedules}

    def list_all(self):
        return list(self.items.values())

    def get_by_id(self, schedule_id):
        return self.items.get(schedule_id)

    def create(self, schedule):
        self.items[schedule.schedule_id] = schedule

    def update(self, schedule):
        if schedule.schedule_id not in self.items:
            return False
        self.items[schedule.schedule_id] = schedule
        return True

    def delete(self, schedule_id):
        return self.items.pop(schedule_id, None) is not None


class FakeWorkEntryRepo:
    def __init__(self, entries=()):
        self.rows = list(entries)
        self.fail_delete = False
        self.set_locked_calls = 0

    def list_all(self):
        return list(self.rows)

    def create(self, entry):
        self.rows.append(entry)

    def set_locked(self, key, *, locked):
        self.set_locked_calls += 1
        count = 0
        for i, e in enumerate(self.rows):
            if e.matches(key):
                self.rows[i] = replace(e, locked=locked)
                count += 1
        return count

    def delete_for_schedule(self, schedule_id):
        if self.fail_delete:
            raise BackendError("work_entries delete failed")
        before = len(self.rows)
        self.rows = [e for e in self.rows if e.schedule_id != schedule_id]
        return before - len(self.rows)


class FakeAccountRepo:
    def __init__(self, accounts=()):
        self.items = {a.email: a for a in accounts}

    def get_by_email(self, email):
        return self.items.get(email)


@pytest.fixture
def fixed_now():
    return NOW


@pytest.fixture
def make_item():
    def _make(item_id, task="Stripping", employee_ids=("EMP-1",), **params):
        workers = params.pop("workers", len(employee_ids))
        return ScheduleItem(item_id=item_id, task=task, workers=workers, employee_ids=tuple(employee_ids), **params)

    return _make


@pytest.fixture
def make_schedule():
    def _make(schedule_id, day, items):
        return Schedule(schedule_id=schedule_id, date=day, items=tuple(items), created_at=NOW)

    return _make


@pytest.fixture
def make_entry():
    counter = {"n": 0}

    def _make(schedule_id, item_id, employee_id, quantity=1.0, locked=False, recorded_at=NOW, **extra):
        counter["n"] += 1
        return WorkEntry(
            entry_id=f"WORK-{counter['n']:06d}-000",
            schedule_id=schedule_id,
            schedule_item_id=item_id,
            employee_id=employee_id,
            quantity=quantity,
            remarks=extra.pop("remarks", ""),
            recorded_at=recorded_at,
            locked=locked,
            **extra,
        )

    return _make


@pytest.fixture
def employees_repo():
    return FakeEmployeeRepo(
        [
            Employee("EMP-1", "Thandi", "Moyo", id_number="63-123456A"),
            Employee("EMP-2", "Brian", "Ncube", id_number="08-654321B"),
            Employee("EMP-3", "Alice", "Zulu"),
        ]
    )


@pytest.fixture
def schedules_repo():
    return FakeScheduleRepo()


@pytest.fixture
def entries_repo():
    return FakeWorkEntryRepo()


@pytest.fixture
def accounts_repo():
    return FakeAccountRepo(
        [
            Account("supervisor@example.com", "Floor Supervisor", generate_password_hash("admin123"), Role.ADMIN),
            Account("clerk@example.com", "Scale Clerk", generate_password_hash("user123"), Role.USER),
            Account("gone@example.com", "Former Clerk", generate_password_hash("gone123"), Role.USER, is_active=False),
        ]
    )


@pytest.fixture
def rate_store(tmp_path):
    return JsonPayRateStore(tmp_path / "pay_rates.json")


@pytest.fixture
def draft_store(tmp_path):
    return JsonDraftStore(tmp_path / "drafts.json", ttl=timedelta(hours=72))


@pytest.fixture
def schedule_service(schedules_repo, entries_repo):
    return ScheduleService(schedules_repo, entries_repo)


@pytest.fixture
def ledger(entries_repo, schedules_repo, draft_store):
    return WorkEntryLedger(entries_repo, schedules_repo, draft_store)


@pytest.fixture
def container(accounts_repo, employees_repo, schedules_repo, entries_repo, rate_store, draft_store):
    return wire_container(
        accounts_repo=accounts_repo,
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        work_entries_repo=entries_repo,
        rate_store=rate_store,
        draft_store=draft_store,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    flask_app = create_app(container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(role: Role):
        with client.session_transaction() as sess:
            sess["email"] = f"{role.value}@example.com"
            sess["name"] = role.value.title()
            sess["role"] = role.value
        return client

    return _login
