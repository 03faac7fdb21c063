from dataclasses import asdict
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from reportcards.config.settings import settings
from reportcards.core.entities import Mark, Student, Subject
from reportcards.core.pipeline import ClassResults
from reportcards.services.results_service import ResultsService, ResultsServiceError
from reportcards.utils.logger import get_logger

log = get_logger("api")

app = FastAPI(title="Report Cards Results API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class StudentPayload(BaseModel):
    id: str
    name: str
    roll_number: str = "-"


class SubjectPayload(BaseModel):
    id: str
    name: str
    max_marks: float = Field(default=100, gt=0)


class MarkPayload(BaseModel):
    student_id: str
    subject_id: str
    obtained_marks: float


class ExamResultsPayload(BaseModel):
    students: List[StudentPayload] = Field(default_factory=list)
    subjects: List[SubjectPayload] = Field(default_factory=list)
    marks: List[MarkPayload] = Field(default_factory=list)
    denominator_policy: Optional[Literal["configured", "recorded"]] = None


class GradePayload(BaseModel):
    percentage: float


def _service() -> ResultsService:
    try:
        return ResultsService.from_settings()
    except ResultsServiceError as exc:
        log.error("Results service misconfigured: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


def _compute(service: ResultsService, payload: ExamResultsPayload) -> ClassResults:
    try:
        return service.compute(
            students=[Student(**s.model_dump()) for s in payload.students],
            subjects=[Subject(**s.model_dump()) for s in payload.subjects],
            marks=[Mark(**m.model_dump()) for m in payload.marks],
            policy=payload.denominator_policy,
        )
    except (ResultsServiceError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/grading/table")
def grading_table() -> Dict:
    return _service().grade_table_rows()


@app.post("/grading/grade")
def grade(payload: GradePayload) -> Dict:
    return _service().grade(payload.percentage)


@app.post("/results/compute")
def compute_results(payload: ExamResultsPayload) -> Dict:
    class_results = _compute(_service(), payload)
    return {
        "results": [asdict(r) for r in class_results.results],
        "statistics": asdict(class_results.statistics),
        "warnings": list(class_results.warnings),
    }


@app.post("/results/report-cards")
def report_cards(payload: ExamResultsPayload) -> Dict:
    service = _service()
    class_results = _compute(service, payload)
    return {
        "report_cards": service.report_cards(class_results),
        "warnings": list(class_results.warnings),
    }
