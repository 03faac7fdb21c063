from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from reportcards.core.ranking import PositionEntry, compute_positions
from reportcards.core.scoring import DEFAULT_GRADE_TABLE, GradeTable, is_passing

TOP_PERFORMER_SLOTS = 3


@dataclass(frozen=True)
class StatisticsEntry:
    student_id: str
    name: str
    percentage: float


@dataclass(frozen=True)
class TopPerformer:
    student_id: str
    name: str
    percentage: float
    position: int


@dataclass(frozen=True)
class ClassStatistics:
    total_students: int = 0
    average_percentage: float = 0.0
    highest_percentage: float = 0.0
    lowest_percentage: float = 0.0
    pass_count: int = 0
    fail_count: int = 0
    top3: Tuple[TopPerformer, ...] = ()


def compute_top_performers(entries: Iterable[StatisticsEntry], slots: int = TOP_PERFORMER_SLOTS) -> Tuple[TopPerformer, ...]:
    entries = list(entries)
    positions = compute_positions(PositionEntry(e.student_id, e.percentage) for e in entries)
    ordered = sorted(enumerate(entries), key=lambda pair: (positions[pair[1].student_id], pair[0]))
    return tuple(
        TopPerformer(
            student_id=e.student_id,
            name=e.name,
            percentage=e.percentage,
            position=positions[e.student_id],
        )
        for _, e in ordered[:slots]
    )


def compute_class_statistics(
    entries: Iterable[StatisticsEntry],
    table: GradeTable = DEFAULT_GRADE_TABLE,
) -> ClassStatistics:
    entries = list(entries)
    if not entries:
        return ClassStatistics()

    percentages = [e.percentage for e in entries]
    passed = sum(1 for p in percentages if is_passing(p, table))

    return ClassStatistics(
        total_students=len(entries),
        average_percentage=sum(percentages) / len(percentages),
        highest_percentage=max(percentages),
        lowest_percentage=min(percentages),
        pass_count=passed,
        fail_count=len(entries) - passed,
        top3=compute_top_performers(entries),
    )
