from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class GradeBand:
    min_percentage: float
    label: str
    grade_point: float = 0.0
    passing: bool = True


GradeTable = Tuple[GradeBand, ...]

# Ordered highest boundary first; each boundary belongs to its own band.
DEFAULT_GRADE_TABLE: GradeTable = (
    GradeBand(90, "A+", 4.0),
    GradeBand(80, "A", 3.7),
    GradeBand(70, "B+", 3.3),
    GradeBand(60, "B", 3.0),
    GradeBand(50, "C+", 2.5),
    GradeBand(40, "C", 2.0),
    GradeBand(33, "D", 1.0),
    GradeBand(0, "F", 0.0, passing=False),
)


def compute_percentage(obtained: float, maximum: float) -> float:
    if maximum == 0:
        return 0.0
    return (obtained / maximum) * 100


def grade_band(percentage: float, table: GradeTable = DEFAULT_GRADE_TABLE) -> GradeBand:
    """
    table: non-empty, highest boundary first (use build_grade_table).
    A percentage below every boundary falls into the lowest band.
    """
    if not table:
        raise ValueError("Grade table must contain at least one band")
    for band in table:
        if percentage >= band.min_percentage:
            return band
    return table[-1]


def compute_grade(percentage: float, table: GradeTable = DEFAULT_GRADE_TABLE) -> str:
    return grade_band(percentage, table).label


def grade_point(percentage: float, table: GradeTable = DEFAULT_GRADE_TABLE) -> float:
    return grade_band(percentage, table).grade_point


def pass_threshold(table: GradeTable = DEFAULT_GRADE_TABLE) -> float:
    """Lowest boundary that still earns a passing grade."""
    passing = [band.min_percentage for band in table if band.passing]
    if not passing:
        raise ValueError("Grade table has no passing band")
    return min(passing)


def is_passing(percentage: float, table: GradeTable = DEFAULT_GRADE_TABLE) -> bool:
    return grade_band(percentage, table).passing


def build_grade_table(bands: Iterable[GradeBand]) -> GradeTable:
    ordered = tuple(sorted(bands, key=lambda b: b.min_percentage, reverse=True))
    if not ordered:
        raise ValueError("Grade table must contain at least one band")
    boundaries = [b.min_percentage for b in ordered]
    if len(set(boundaries)) != len(boundaries):
        raise ValueError("Grade table contains duplicate boundaries")
    pass_threshold(ordered)

    # Every passing band sits above every failing band.
    seen_failing = False
    for band in ordered:
        if not band.passing:
            seen_failing = True
        elif seen_failing:
            raise ValueError(f"Passing band {band.label!r} sits below a failing band")
    if ordered[-1].passing and ordered[-1].min_percentage > 0:
        raise ValueError("Lowest band must be non-passing or start at 0")
    return ordered


def load_grade_table(raw: str) -> GradeTable:
    """
    raw: JSON list such as [{"min": 90, "label": "A+", "gp": 4.0}, ...]
    "passing" defaults to true; at least one band must be passing.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Grade table is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise ValueError("Grade table must be a JSON list of bands")

    bands = []
    for item in data:
        if not isinstance(item, dict) or "min" not in item or "label" not in item:
            raise ValueError(f"Grade band needs 'min' and 'label': {item!r}")
        if not isinstance(item.get("passing", True), bool):
            raise ValueError(f"Grade band 'passing' must be true or false: {item!r}")
        bands.append(
            GradeBand(
                min_percentage=float(item["min"]),
                label=str(item["label"]),
                grade_point=float(item.get("gp", 0)),
                passing=item.get("passing", True),
            )
        )
    return build_grade_table(bands)
