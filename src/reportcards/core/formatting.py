from typing import Optional

from reportcards.core.scoring import DEFAULT_GRADE_TABLE, GradeTable, is_passing

PROMOTED_REMARK = "Promoted to next class"
NEEDS_IMPROVEMENT_REMARK = "Needs improvement"


def position_suffix(position: int) -> str:
    if 11 <= position % 100 <= 13:
        return f"{position}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(position % 10, "th")
    return f"{position}{suffix}"


def position_label(position: Optional[int]) -> str:
    return position_suffix(position) if position else "-"


def is_in_top3(position: Optional[int]) -> bool:
    return position is not None and 1 <= position <= 3


def format_percentage(percentage: float, *, round_to: int = 2) -> str:
    return f"{percentage:.{round_to}f}%"


def remarks_for(percentage: float, table: GradeTable = DEFAULT_GRADE_TABLE) -> str:
    return PROMOTED_REMARK if is_passing(percentage, table) else NEEDS_IMPROVEMENT_REMARK
