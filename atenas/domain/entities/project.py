"""Project entity"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, List
import math

from ..value_objects.entity_ids import ProjectId, HeadquartersId
from ..enums import ProjectStatus


def funding_progress(raised, goal) -> int:
    """Percent of the goal raised, capped at 100. A missing goal counts as 1."""
    goal = float(goal or 0) or 1.0
    percent = min(float(raised or 0) / goal * 100, 100)
    return int(math.floor(percent + 0.5))


@dataclass
class Project:
    id: ProjectId
    name: str
    category: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    finance_goal: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    headquarters_ids: List[HeadquartersId] = field(default_factory=list)

    def __post_init__(self):
        self.name = self._validate_name(self.name)
        self.finance_goal = self._validate_goal(self.finance_goal)

    @staticmethod
    def _validate_name(name: str) -> str:
        name = (name or "").strip()
        if len(name) < 3:
            raise ValueError("El nombre debe tener al menos 3 caracteres")
        return name

    @staticmethod
    def _validate_goal(goal) -> Optional[Decimal]:
        if goal is None:
            return None
        goal = Decimal(str(goal))
        if goal < 0:
            raise ValueError("La meta debe ser mayor o igual a 0")
        return goal

    @classmethod
    def create(cls, name: str, **fields) -> 'Project':
        return cls(id=ProjectId.generate(), name=name, **fields)

    def update(self, **fields) -> None:
        """Apply the provided fields, re-running validation"""
        if "name" in fields and fields["name"] is not None:
            self.name = self._validate_name(fields["name"])
        if "finance_goal" in fields:
            self.finance_goal = self._validate_goal(fields["finance_goal"])
        for name in ("category", "type", "description", "start_date", "end_date"):
            if name in fields:
                setattr(self, name, fields[name])
        if fields.get("status") is not None:
            self.status = ProjectStatus(fields["status"])
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("La fecha de fin debe ser posterior a la fecha de inicio")

    def progress(self, raised) -> int:
        return funding_progress(raised, self.finance_goal)

    @property
    def is_active(self) -> bool:
        return self.status == ProjectStatus.ACTIVE
