from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Student:
    id: str
    name: str
    roll_number: str = "-"


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    max_marks: float = 100

    def __post_init__(self) -> None:
        if self.max_marks <= 0:
            raise ValueError(f"Subject {self.id!r} must have max_marks greater than 0")


@dataclass(frozen=True)
class Mark:
    student_id: str
    subject_id: str
    obtained_marks: float


@dataclass(frozen=True)
class SubjectScore:
    subject_id: str
    subject_name: str
    obtained_marks: float
    max_marks: float

    def __post_init__(self) -> None:
        if self.max_marks <= 0:
            raise ValueError(f"Subject {self.subject_id!r} must have max_marks greater than 0")


@dataclass(frozen=True)
class SubjectRank:
    rank: int
    total: int


@dataclass(frozen=True)
class StudentResult:
    student_id: str
    student_name: str
    roll_number: str
    subjects: Tuple[SubjectScore, ...]
    total_obtained: float
    total_max: float
    percentage: float
    grade: str
    position: Optional[int] = None
    subject_ranks: Dict[str, SubjectRank] = field(default_factory=dict)

    @property
    def is_ranked(self) -> bool:
        return self.position is not None
