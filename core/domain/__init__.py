from core.domain.enums import TaskPriority, WorkerStatus, WorkStatus, enum_value
from core.domain.identifiers import generate_id
from core.domain.phase import Phase
from core.domain.project import Project, ProjectWorker
from core.domain.task import Task, TaskWorker
from core.domain.worker import Worker

__all__ = [
    "generate_id",
    "enum_value",
    "WorkStatus",
    "TaskPriority",
    "WorkerStatus",
    "Task",
    "TaskWorker",
    "Phase",
    "Project",
    "ProjectWorker",
    "Worker",
]
