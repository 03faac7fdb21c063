from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from reportcards.core.entities import Mark, Student, StudentResult, Subject, SubjectScore
from reportcards.core.ranking import (
    PositionEntry,
    SubjectMarkEntry,
    apply_rankings,
    compute_positions,
    compute_subject_ranks,
)
from reportcards.core.scoring import DEFAULT_GRADE_TABLE, GradeTable, compute_grade, compute_percentage
from reportcards.core.statistics import ClassStatistics, StatisticsEntry, compute_class_statistics
from reportcards.core.totals import compute_totals
from reportcards.utils.logger import get_logger

log = get_logger("pipeline")

# Every configured subject counts toward total_max; a missing mark scores zero.
POLICY_CONFIGURED = "configured"
# Only subjects with a recorded mark count, so denominators may differ per student.
POLICY_RECORDED = "recorded"
DENOMINATOR_POLICIES = (POLICY_CONFIGURED, POLICY_RECORDED)

NO_SUBJECTS_CONFIGURED = "NO_SUBJECTS_CONFIGURED"
NO_STUDENTS = "NO_STUDENTS"


@dataclass(frozen=True)
class ClassResults:
    results: Tuple[StudentResult, ...]
    statistics: ClassStatistics
    warnings: Tuple[str, ...] = ()

    def for_student(self, student_id: str) -> StudentResult | None:
        for result in self.results:
            if result.student_id == student_id:
                return result
        return None


def build_subject_scores(
    subjects: Sequence[Subject],
    marks_by_subject: Dict[str, float],
    policy: str = POLICY_CONFIGURED,
) -> List[SubjectScore]:
    if policy not in DENOMINATOR_POLICIES:
        raise ValueError(f"Unsupported denominator policy: {policy}. Use 'configured' or 'recorded'.")

    scores: List[SubjectScore] = []
    for subject in subjects:
        if subject.id not in marks_by_subject and policy == POLICY_RECORDED:
            continue
        scores.append(
            SubjectScore(
                subject_id=subject.id,
                subject_name=subject.name,
                obtained_marks=marks_by_subject.get(subject.id, 0),
                max_marks=subject.max_marks,
            )
        )
    return scores


def score_student(
    student: Student,
    subject_scores: Iterable[SubjectScore],
    table: GradeTable = DEFAULT_GRADE_TABLE,
) -> StudentResult:
    """Totals and scoring for one student; the result is not ranked yet."""
    subject_scores = tuple(subject_scores)
    totals = compute_totals(subject_scores)
    percentage = compute_percentage(totals.obtained, totals.max)
    return StudentResult(
        student_id=student.id,
        student_name=student.name,
        roll_number=student.roll_number,
        subjects=subject_scores,
        total_obtained=totals.obtained,
        total_max=totals.max,
        percentage=percentage,
        grade=compute_grade(percentage, table),
    )


def _group_marks(
    students: Sequence[Student],
    subjects: Sequence[Subject],
    marks: Iterable[Mark],
) -> Dict[str, Dict[str, float]]:
    student_ids = {s.id for s in students}
    subject_ids = {s.id for s in subjects}
    grouped: Dict[str, Dict[str, float]] = {}
    skipped = 0
    duplicates = 0
    for mark in marks:
        if mark.student_id not in student_ids or mark.subject_id not in subject_ids:
            skipped += 1
            continue
        by_subject = grouped.setdefault(mark.student_id, {})
        if mark.subject_id in by_subject:
            duplicates += 1
        # Last mark for a (student, subject) pair wins.
        by_subject[mark.subject_id] = mark.obtained_marks
    if skipped:
        log.warning("Ignored %d mark(s) for unknown students or unconfigured subjects", skipped)
    if duplicates:
        log.warning("Replaced %d duplicate mark(s) for the same student and subject", duplicates)
    return grouped


def compute_class_results(
    students: Sequence[Student],
    subjects: Sequence[Subject],
    marks: Iterable[Mark],
    table: GradeTable = DEFAULT_GRADE_TABLE,
    policy: str = POLICY_CONFIGURED,
) -> ClassResults:
    if policy not in DENOMINATOR_POLICIES:
        raise ValueError(f"Unsupported denominator policy: {policy}. Use 'configured' or 'recorded'.")

    warnings: List[str] = []
    if not subjects:
        warnings.append(NO_SUBJECTS_CONFIGURED)
    if not students:
        warnings.append(NO_STUDENTS)
    for key in warnings:
        log.warning("Computing results with %s", key)

    grouped = _group_marks(students, subjects, marks)

    unranked = [
        score_student(student, build_subject_scores(subjects, grouped.get(student.id, {}), policy), table)
        for student in students
    ]

    positions = compute_positions(PositionEntry(r.student_id, r.percentage) for r in unranked)
    subject_ranks = compute_subject_ranks(
        SubjectMarkEntry(student_id, subject_id, obtained)
        for student_id, by_subject in grouped.items()
        for subject_id, obtained in by_subject.items()
    )
    ranked = apply_rankings(unranked, positions, subject_ranks)

    ranked = tuple(r for _, r in sorted(enumerate(ranked), key=lambda pair: (pair[1].position, pair[0])))

    statistics = compute_class_statistics(
        (StatisticsEntry(r.student_id, r.student_name, r.percentage) for r in unranked),
        table,
    )
    log.debug(
        "Ranked %d student(s) across %d subject(s) with policy=%s",
        len(ranked),
        len(subjects),
        policy,
    )
    return ClassResults(results=ranked, statistics=statistics, warnings=tuple(warnings))
