"""
Per-instrument answer collections.

Each instrument gets its own response type so the unanswered-item rule travels
with the data: survey categories average only what was answered, while quiz
sub-scores count every skipped item as incorrect.
"""
from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import InvalidSubmissionError

class Instrument(str, Enum):
    PSYCHOMETRIC = "psychometric"
    TECHNICAL = "technical"
    WISCAR = "wiscar"

def split_question_id(question_id: str) -> Tuple[str, int]:
    """Splits '<categoryKey>_<index>' into its parts."""
    category_key, sep, index = question_id.rpartition('_')
    if not sep or not category_key or not index.isdigit():
        raise InvalidSubmissionError(
            f"Malformed question id '{question_id}'. Expected '<category>_<index>'."
        )
    return category_key, int(index)

class ResponseSet(BaseModel):
    """Immutable question id → numeric answer mapping for one instrument."""
    model_config = ConfigDict(frozen=True)

    instrument: Instrument
    answers: Mapping[str, float] = Field(default_factory=dict, validate_default=True)

    @field_validator('answers', mode='after')
    @classmethod
    def _read_only_answers(cls, answers: Mapping[str, float]) -> Mapping[str, float]:
        return MappingProxyType(dict(answers))

    def __contains__(self, question_id: object) -> bool:
        return question_id in self.answers

    def get(self, question_id: str, default: Optional[float] = None) -> Optional[float]:
        return self.answers.get(question_id, default)

    def answered(self, question_ids: Iterable[str]) -> List[float]:
        """Values for the given ids that have an answer, in the given order."""
        return [self.answers[qid] for qid in question_ids if qid in self.answers]

    def with_answer(self, question_id: str, value: float):
        """Returns a copy with one answer set or overwritten."""
        return type(self)(instrument=self.instrument, answers={**self.answers, question_id: value})

    def without(self, question_id: str):
        """Returns a copy with the answer cleared (back to unanswered)."""
        remaining = {qid: v for qid, v in self.answers.items() if qid != question_id}
        return type(self)(instrument=self.instrument, answers=remaining)

class SurveyResponses(ResponseSet):
    """Likert answers. Unanswered questions are left out of category averages."""
    instrument: Literal[Instrument.PSYCHOMETRIC, Instrument.WISCAR]

class QuizResponses(ResponseSet):
    """Aptitude answers. Unanswered items are graded as incorrect."""
    instrument: Literal[Instrument.TECHNICAL] = Instrument.TECHNICAL
