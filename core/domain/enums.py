from __future__ import annotations

from enum import Enum


class WorkStatus(str, Enum):
    PENDING = "pending"
    ON_GOING = "onGoing"
    COMPLETED = "completed"
    DELAYED = "delayed"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self.value]


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class WorkerStatus(str, Enum):
    # Only for workers created but never staffed on a project.
    UNASSIGNED = "unassigned"
    ASSIGNED = "assigned"
    TERMINATED = "terminated"


_DISPLAY_NAMES = {
    "pending": "Pending",
    "onGoing": "On Going",
    "completed": "Completed",
    "delayed": "Delayed",
    "cancelled": "Cancelled",
}


def enum_value(value: object) -> str | None:
    """
    Normalize an enum member, its raw value or an arbitrary string into the
    plain string used as a lookup key. None stays None.
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


__all__ = ["WorkStatus", "TaskPriority", "WorkerStatus", "enum_value"]
