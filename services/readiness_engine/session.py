import logging
from typing import Any, Dict

from .models import AssessmentContent, AssessmentScores, InvalidSubmissionError, TechnicalScores
from .responses import Instrument, QuizResponses, SurveyResponses
from .scorer import (
    parse_numeric_entry,
    score_psychometric,
    score_technical,
    score_wiscar,
    validate_quiz_answers,
)

logger = logging.getLogger(__name__)

class AssessmentSession:
    """
    Caller-owned state for one sitting of the assessment.

    The two surveys rescore after every answer. The aptitude quiz only
    rescores when calculate_technical() is called; recording a quiz answer
    leaves technical_scores untouched until then.
    """

    def __init__(self, content: AssessmentContent):
        self.content = content
        self.psychometric = SurveyResponses(instrument=Instrument.PSYCHOMETRIC)
        self.technical = QuizResponses()
        self.wiscar = SurveyResponses(instrument=Instrument.WISCAR)

        self.psychometric_scores: Dict[str, float] = score_psychometric(content.psychometric, self.psychometric)
        self.wiscar_scores: Dict[str, float] = score_wiscar(content.wiscar, self.wiscar)
        self.technical_scores = TechnicalScores()
        self.submitted = False

    def _ensure_open(self) -> None:
        if self.submitted:
            raise InvalidSubmissionError("Assessment already submitted; responses are read-only.")

    def answer_psychometric(self, question_id: str, value: int) -> Dict[str, float]:
        self._ensure_open()
        updated = self.psychometric.with_answer(question_id, value)
        # Score first so an invalid answer never lands in the response set.
        self.psychometric_scores = score_psychometric(self.content.psychometric, updated)
        self.psychometric = updated
        logger.debug(f"Psychometric answer {question_id}={value}; scores={self.psychometric_scores}")
        return self.psychometric_scores

    def answer_wiscar(self, question_id: str, value: int) -> Dict[str, float]:
        self._ensure_open()
        updated = self.wiscar.with_answer(question_id, value)
        self.wiscar_scores = score_wiscar(self.content.wiscar, updated)
        self.wiscar = updated
        logger.debug(f"WISCAR answer {question_id}={value}; scores={self.wiscar_scores}")
        return self.wiscar_scores

    def answer_technical(self, question_id: str, raw: Any) -> None:
        """Records a choice index or numeric entry. Unparseable entries clear the answer."""
        self._ensure_open()
        value = parse_numeric_entry(raw)
        if value is None:
            updated = self.technical.without(question_id)
        else:
            updated = self.technical.with_answer(question_id, value)
        # Check the id even when the entry was cleared.
        validate_quiz_answers(self.content.technical, updated.with_answer(question_id, 0))
        self.technical = updated

    def calculate_technical(self) -> TechnicalScores:
        self.technical_scores = score_technical(self.content.technical, self.technical)
        return self.technical_scores

    def snapshot(self) -> AssessmentScores:
        """Current category scores in the persisted shape."""
        return AssessmentScores(
            psychometric=dict(self.psychometric_scores),
            technical=self.technical_scores.model_copy(),
            wiscar=dict(self.wiscar_scores),
        )

    def finalize(self) -> AssessmentScores:
        """Marks the session read-only and returns the scores to persist."""
        self.submitted = True
        return self.snapshot()
