from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class TaskType(str, Enum):
    """Suggested task names for schedule items.

    Items may carry free-text task names; those have no TaskType.
    """

    STRIPPING = "Stripping"
    BAILING_LAMINA = "Bailing Lamina"
    MACHINE = "Machine"
    BAILING_STICKS = "Bailing Sticks"
    TICKET_BASED_WORK = "Ticket-Based Work"
    GRADING = "Grading"

    @classmethod
    def from_task(cls, task: str) -> TaskType | None:
        for member in cls:
            if member.value.lower() == (task or "").strip().lower():
                return member
        return None

    @property
    def slug(self) -> str:
        return self.value.lower().replace(" ", "-")


class PayloadKind(str, Enum):
    """Discriminator stored with a work entry payload."""

    SCALES = "scales"
    CARTONS = "cartons"
    MACHINE = "machine"
    TICKET = "ticket"
    GRADING = "grading"


class OutputCategory(str, Enum):
    """Machine output buckets."""

    OUTPUT = "output"
    STICKS = "sticks"
    F8 = "f8"
    DUST = "dust"
