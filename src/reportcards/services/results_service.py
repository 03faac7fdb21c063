from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional, Sequence

from reportcards.config.settings import settings
from reportcards.core.entities import Mark, Student, Subject
from reportcards.core.formatting import format_percentage, is_in_top3, position_label, remarks_for
from reportcards.core.pipeline import DENOMINATOR_POLICIES, ClassResults, compute_class_results
from reportcards.core.scoring import (
    DEFAULT_GRADE_TABLE,
    GradeTable,
    grade_band,
    load_grade_table,
    pass_threshold,
)
from reportcards.utils.logger import get_logger

log = get_logger("results_service")


class ResultsServiceError(Exception):
    pass


class ResultsService:
    def __init__(self, grade_table: GradeTable = DEFAULT_GRADE_TABLE, denominator_policy: str = "configured") -> None:
        if denominator_policy not in DENOMINATOR_POLICIES:
            raise ResultsServiceError(f"UNSUPPORTED_DENOMINATOR_POLICY: {denominator_policy}")
        self.grade_table = grade_table
        self.denominator_policy = denominator_policy

    @classmethod
    def from_settings(cls) -> "ResultsService":
        table = DEFAULT_GRADE_TABLE
        if settings.grade_table_json.strip():
            try:
                table = load_grade_table(settings.grade_table_json)
            except ValueError as exc:
                raise ResultsServiceError(f"INVALID_GRADE_TABLE: {exc}") from exc
        return cls(table, settings.denominator_policy)

    def grade_table_rows(self) -> Dict[str, Any]:
        return {
            "bands": [asdict(band) for band in self.grade_table],
            "pass_threshold": pass_threshold(self.grade_table),
        }

    def grade(self, percentage: float) -> Dict[str, Any]:
        band = grade_band(percentage, self.grade_table)
        return {
            "grade": band.label,
            "grade_point": band.grade_point,
            "passing": band.passing,
        }

    def compute(
        self,
        students: Sequence[Student],
        subjects: Sequence[Subject],
        marks: Iterable[Mark],
        policy: Optional[str] = None,
    ) -> ClassResults:
        policy = policy or self.denominator_policy
        if policy not in DENOMINATOR_POLICIES:
            raise ResultsServiceError(f"UNSUPPORTED_DENOMINATOR_POLICY: {policy}")
        log.info(
            "Computing results for %d student(s), %d subject(s), policy=%s",
            len(students),
            len(subjects),
            policy,
        )
        return compute_class_results(students, subjects, marks, self.grade_table, policy)

    def report_cards(self, class_results: ClassResults) -> List[Dict[str, Any]]:
        statistics = asdict(class_results.statistics)
        cards: List[Dict[str, Any]] = []
        for result in class_results.results:
            cards.append(
                {
                    "result": asdict(result),
                    "position_label": position_label(result.position),
                    "is_top3": is_in_top3(result.position),
                    "percentage_display": format_percentage(result.percentage),
                    "remarks": remarks_for(result.percentage, self.grade_table),
                    "class_statistics": statistics,
                }
            )
        return cards
