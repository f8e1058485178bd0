import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .loader import DEFAULT_CONTENT_PATH, load_content_from_file
from .models import (
    AssessmentContent,
    AssessmentReport,
    AssessmentResult,
    AssessmentScores,
    IncompleteAssessmentError,
    NumericItem,
)
from .responses import Instrument, QuizResponses, SurveyResponses
from .results_generator import evaluate_scores, generate_report
from .scorer import (
    parse_numeric_entry,
    score_psychometric,
    score_technical,
    score_wiscar,
    validate_quiz_answers,
)
from .session import AssessmentSession
from .storage import ResultStore

logger = logging.getLogger(__name__)

class AssessmentEngine:
    """
    Loads the assessment content and turns answers into scores and results.

    The engine keeps no per-user state; every call recomputes from its inputs.
    """
    def __init__(
        self,
        config_path: Union[str, Path, None] = None,
        content: Optional[AssessmentContent] = None,
    ):
        """
        Args:
            config_path: Path to the assessment content YAML. Defaults to the bundled content.
            content: Already-validated content; takes precedence over config_path.
        """
        if content is not None:
            self.content = content
        else:
            self.config_path = Path(config_path) if config_path else DEFAULT_CONTENT_PATH
            self.content = load_content_from_file(self.config_path)

    def new_session(self) -> AssessmentSession:
        return AssessmentSession(self.content)

    def get_questions(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Returns question ids with their text (and options for choice items) per instrument.
        (Does not implement any presentation logic.)
        """
        def survey_questions(survey):
            return [
                {"id": qid, "category": category.key, "text": text}
                for category in survey.categories
                for qid, text in zip(category.question_ids, category.questions)
            ]

        technical = []
        for section_key, items in self.content.technical.sections().items():
            for index, item in enumerate(items):
                entry = {"id": f"{section_key}_{index}", "category": section_key, "text": item.question}
                if isinstance(item, NumericItem):
                    entry["kind"] = "numeric"
                else:
                    entry["kind"] = "choice"
                    entry["options"] = list(item.options)
                technical.append(entry)

        return {
            Instrument.PSYCHOMETRIC.value: survey_questions(self.content.psychometric),
            Instrument.TECHNICAL.value: technical,
            Instrument.WISCAR.value: survey_questions(self.content.wiscar),
        }

    def score_responses(
        self,
        psychometric: Mapping[str, float],
        technical: Mapping[str, Any],
        wiscar: Mapping[str, float],
    ) -> AssessmentScores:
        """
        Scores a complete submission in one pass.

        Technical entries may be raw text; anything that does not parse as a
        number is treated as unanswered.
        """
        # Ids are checked before unparseable entries are dropped.
        validate_quiz_answers(
            self.content.technical,
            QuizResponses(answers={question_id: 0 for question_id in technical}),
        )
        technical_answers = {}
        for question_id, raw in technical.items():
            value = parse_numeric_entry(raw)
            if value is not None:
                technical_answers[question_id] = value

        return AssessmentScores(
            psychometric=score_psychometric(
                self.content.psychometric,
                SurveyResponses(instrument=Instrument.PSYCHOMETRIC, answers=dict(psychometric)),
            ),
            technical=score_technical(self.content.technical, QuizResponses(answers=technical_answers)),
            wiscar=score_wiscar(
                self.content.wiscar,
                SurveyResponses(instrument=Instrument.WISCAR, answers=dict(wiscar)),
            ),
        )

    def evaluate(self, scores: AssessmentScores) -> AssessmentResult:
        return evaluate_scores(scores)

    def report(self, scores: AssessmentScores) -> AssessmentReport:
        return generate_report(scores)

    def submit(self, store: ResultStore, scores: AssessmentScores) -> None:
        """Persists category scores only; derived values are recomputed on read."""
        store.save(scores)
        logger.info("Assessment scores submitted.")

    def load_results(self, store: ResultStore) -> AssessmentReport:
        scores = store.load()
        if scores is None:
            raise IncompleteAssessmentError("No completed assessment found for this session.")
        return generate_report(scores)
