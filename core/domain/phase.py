from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from core.domain.identifiers import generate_id
from core.domain.task import Task


@dataclass
class Phase:
    id: str
    project_id: str
    name: str
    description: str = ""
    start_datetime: Optional[datetime] = None
    completion_datetime: Optional[datetime] = None
    actual_completion_datetime: Optional[datetime] = None
    tasks: List[Task] = field(default_factory=list)

    @staticmethod
    def create(project_id: str, name: str, description: str = "", **extra) -> "Phase":
        return Phase(
            id=generate_id(),
            project_id=project_id,
            name=name,
            description=description,
            **extra,
        )


__all__ = ["Phase"]
