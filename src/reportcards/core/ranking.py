from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple, TypeVar

from reportcards.core.entities import StudentResult, SubjectRank

T = TypeVar("T")


@dataclass(frozen=True)
class PositionEntry:
    student_id: str
    percentage: float


@dataclass(frozen=True)
class SubjectMarkEntry:
    student_id: str
    subject_id: str
    marks: float


def competition_rank(items: Iterable[T], score: Callable[[T], float]) -> List[Tuple[T, int]]:
    """
    Standard competition ranking ("1224"): equal scores share a rank and the
    next distinct score takes its 1-based index in the sorted order.
    Equality is exact. Sorting is stable, so ties keep input order.
    """
    ranked: List[Tuple[T, int]] = []
    previous = None
    current = 0
    for index, item in enumerate(sorted(items, key=score, reverse=True)):
        value = score(item)
        if index == 0 or value != previous:
            current = index + 1
        ranked.append((item, current))
        previous = value
    return ranked


def compute_positions(entries: Iterable[PositionEntry]) -> Dict[str, int]:
    return {entry.student_id: position for entry, position in competition_rank(entries, lambda e: e.percentage)}


def compute_subject_ranks(entries: Iterable[SubjectMarkEntry]) -> Dict[str, Dict[str, SubjectRank]]:
    groups: Dict[str, List[SubjectMarkEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.subject_id, []).append(entry)

    ranks: Dict[str, Dict[str, SubjectRank]] = {}
    for subject_id, group in groups.items():
        total = len(group)
        for entry, rank in competition_rank(group, lambda e: e.marks):
            ranks.setdefault(entry.student_id, {})[subject_id] = SubjectRank(rank=rank, total=total)
    return ranks


def apply_rankings(
    results: Sequence[StudentResult],
    positions: Mapping[str, int],
    subject_ranks: Mapping[str, Mapping[str, SubjectRank]],
) -> Tuple[StudentResult, ...]:
    return tuple(
        replace(
            result,
            position=positions.get(result.student_id),
            subject_ranks=dict(subject_ranks.get(result.student_id, {})),
        )
        for result in results
    )
