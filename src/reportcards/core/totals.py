from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from reportcards.core.entities import SubjectScore


@dataclass(frozen=True)
class Totals:
    obtained: float
    max: float


def compute_totals(subjects: Iterable[SubjectScore]) -> Totals:
    obtained = 0.0
    maximum = 0.0
    for s in subjects:
        obtained += s.obtained_marks
        maximum += s.max_marks
    return Totals(obtained=obtained, max=maximum)
