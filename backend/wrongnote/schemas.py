from __future__ import annotations

from typing import List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


ProblemLevel = Literal["Low", "Mid", "High", "Top"]
QuestionType = Literal["Concept", "Computation", "Application", "ProblemSolving"]

PROBLEM_LEVELS: List[str] = list(get_args(ProblemLevel))
QUESTION_TYPES: List[str] = list(get_args(QuestionType))

# Chapter filter value meaning "every chapter"
ALL_CHAPTERS = "전체"


class CamelModel(BaseModel):
    """Base for models exchanged with the UI and the store in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


def _empty_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class WrongAnswerRecord(CamelModel):
    id: str
    student_id: str = ""
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    grade: int = Field(ge=1, le=6)
    term: int = Field(ge=1, le=2)
    chapter: str
    problem_level: ProblemLevel
    question_type: QuestionType
    memo: Optional[str] = None
    image_url: Optional[str] = None
    is_resolved: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, value):
        # Spreadsheet cells sometimes come back as full ISO timestamps
        if isinstance(value, str):
            value = value.strip()
            if len(value) > 10 and value[10] == "T":
                return value[:10]
        return value

    @field_validator("memo", "image_url", mode="before")
    @classmethod
    def _blank_optional(cls, value):
        return _empty_to_none(value)

    @field_validator("is_resolved", mode="before")
    @classmethod
    def _sheet_bool(cls, value):
        if value is None or value == "":
            return False
        if isinstance(value, str):
            return value.strip().upper() == "TRUE"
        return value


class NewWrongAnswer(CamelModel):
    """Save payload: a record without id/isResolved, plus an optional image."""

    student_id: str = "unknown"
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    grade: int = Field(ge=1, le=6)
    term: int = Field(ge=1, le=2)
    chapter: str
    problem_level: ProblemLevel
    question_type: QuestionType
    memo: Optional[str] = None
    image_base64: Optional[str] = None
    image_name: Optional[str] = None
    image_type: Optional[str] = None

    @field_validator("student_id", mode="before")
    @classmethod
    def _unknown_student(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return "unknown"
        return value

    @field_validator("memo", "image_base64", "image_name", "image_type", mode="before")
    @classmethod
    def _blank_optional(cls, value):
        return _empty_to_none(value)


class FilterCriteria(CamelModel):
    student_id: Optional[str] = None
    grade: Optional[int] = None
    term: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    chapter: Optional[str] = None


class RadarEntry(CamelModel):
    subject: str
    a: int = Field(alias="A")
    full_mark: int


class BarEntry(CamelModel):
    name: str
    count: int


class PieEntry(CamelModel):
    name: str
    value: int


class AnalysisStats(CamelModel):
    total_wrong: int
    resolved: int
    resolution_rate: int
    worst_chapter: str
    radar_data: List[RadarEntry]
    bar_data: List[BarEntry]
    pie_data: List[PieEntry]
    recent_wrongs: List[WrongAnswerRecord]


class CategorizationRequest(CamelModel):
    image_base64: str
    mime_type: str = "image/jpeg"

    @field_validator("image_base64")
    @classmethod
    def _strip_data_url(cls, value: str) -> str:
        # "data:image/png;base64,...." -> "...."
        if value.startswith("data:") and "," in value:
            return value.split(",", 1)[1]
        return value


class CategorizationResult(CamelModel):
    problem_level: ProblemLevel
    question_type: QuestionType


class WorksheetPage(CamelModel):
    number: int
    records: List[WrongAnswerRecord]


class Worksheet(CamelModel):
    total: int
    pages: List[WorksheetPage]
