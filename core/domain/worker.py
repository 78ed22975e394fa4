from __future__ import annotations

from dataclasses import dataclass

from core.domain.identifiers import generate_id


@dataclass
class Worker:
    id: str
    first_name: str
    last_name: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @staticmethod
    def create(first_name: str, last_name: str = "", email: str = "") -> "Worker":
        return Worker(
            id=generate_id(),
            first_name=first_name,
            last_name=last_name,
            email=email,
        )


__all__ = ["Worker"]
