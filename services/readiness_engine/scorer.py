# services/readiness_engine/scorer.py
# Category aggregation and per-instrument scoring.

import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from .models import (
    AptitudeConfig,
    AptitudeItem,
    CategoryDefinition,
    ChoiceItem,
    InvalidSubmissionError,
    NumericItem,
    SurveyConfig,
    TechnicalScores,
    UnknownCategoryError,
)
from .responses import QuizResponses, SurveyResponses, split_question_id

logger = logging.getLogger(__name__)

# --- Constants ---

SCORE_FLOOR = 0.0
SCORE_CEILING = 100.0

# Psychometric categories stay on the 1-5 answer scale; the x20 happens at combination time.
PSYCHOMETRIC_SCALE_MULTIPLIER = 1.0
# WISCAR categories are stored already expressed on 0-100.
WISCAR_SCALE_MULTIPLIER = 20.0

# --- Aggregation ---

def clamp_score(value: float) -> float:
    return max(SCORE_FLOOR, min(SCORE_CEILING, value))

def aggregate_category(
    category: CategoryDefinition,
    responses: SurveyResponses,
    scale_multiplier: float,
) -> float:
    """Mean of the answered questions of one category, scaled and clamped.

    Unanswered questions are excluded rather than zero-filled, so a partially
    completed category is not dragged down. No answers at all scores 0.
    """
    answered = responses.answered(category.question_ids)
    if not answered:
        return 0.0
    return clamp_score(sum(answered) / len(answered) * scale_multiplier)

def validate_survey_answers(survey: SurveyConfig, responses: SurveyResponses) -> None:
    if responses.instrument.value != survey.id:
        raise InvalidSubmissionError(
            f"Responses for '{responses.instrument.value}' cannot be scored against '{survey.id}'"
        )
    categories = {category.key: category for category in survey.categories}
    allowed_values = set(survey.scale_values)
    for question_id, value in responses.answers.items():
        category_key, index = split_question_id(question_id)
        if category_key not in categories:
            raise UnknownCategoryError(
                f"Question '{question_id}' references unknown category '{category_key}' in '{survey.id}'"
            )
        if index >= len(categories[category_key].questions):
            raise InvalidSubmissionError(
                f"Question '{question_id}' does not exist; category '{category_key}' "
                f"has {len(categories[category_key].questions)} questions"
            )
        if value not in allowed_values:
            raise InvalidSubmissionError(
                f"Invalid answer value '{value}' for question '{question_id}'. Expected one of {sorted(allowed_values)}."
            )

def score_survey(
    survey: SurveyConfig,
    responses: SurveyResponses,
    scale_multiplier: float,
) -> Dict[str, float]:
    """Scores every category of a Likert survey. All categories are present in the result."""
    validate_survey_answers(survey, responses)
    return {
        category.key: aggregate_category(category, responses, scale_multiplier)
        for category in survey.categories
    }

def score_psychometric(survey: SurveyConfig, responses: SurveyResponses) -> Dict[str, float]:
    return score_survey(survey, responses, PSYCHOMETRIC_SCALE_MULTIPLIER)

def score_wiscar(survey: SurveyConfig, responses: SurveyResponses) -> Dict[str, float]:
    return score_survey(survey, responses, WISCAR_SCALE_MULTIPLIER)

# --- Aptitude quiz ---

def parse_numeric_entry(raw: Any) -> Optional[float]:
    """Parses a free-text numeric entry. Returns None for anything unusable."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip().replace(',', '')
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    return value if math.isfinite(value) else None

def grade_choice(item: ChoiceItem, given: Optional[float]) -> bool:
    return given is not None and given == item.correct

def grade_numeric(item: NumericItem, given: Optional[float]) -> bool:
    """Correct iff within the absolute tolerance. Missing or non-finite input is incorrect."""
    if given is None or not math.isfinite(given):
        return False
    return abs(given - item.answer) <= item.tolerance

def _grade(item: AptitudeItem, given: Optional[float]) -> bool:
    if isinstance(item, NumericItem):
        return grade_numeric(item, given)
    return grade_choice(item, given)

def score_quiz_section(section_key: str, items: Sequence[AptitudeItem], responses: QuizResponses) -> float:
    """Percentage of correct items among *all* items of the section."""
    if not items:
        return 0.0
    correct = sum(
        1 for index, item in enumerate(items)
        if _grade(item, responses.get(f"{section_key}_{index}"))
    )
    return clamp_score(correct / len(items) * 100)

def validate_quiz_answers(aptitude: AptitudeConfig, responses: QuizResponses) -> None:
    sections = aptitude.sections()
    for question_id in responses.answers:
        section_key, index = split_question_id(question_id)
        if section_key not in sections:
            raise UnknownCategoryError(
                f"Question '{question_id}' references unknown section '{section_key}' in '{aptitude.id}'"
            )
        if index >= len(sections[section_key]):
            raise InvalidSubmissionError(
                f"Question '{question_id}' does not exist; section '{section_key}' "
                f"has {len(sections[section_key])} items"
            )

def score_technical(aptitude: AptitudeConfig, responses: QuizResponses) -> TechnicalScores:
    validate_quiz_answers(aptitude, responses)
    sub_scores: List[float] = [
        score_quiz_section(key, items, responses)
        for key, items in aptitude.sections().items()
    ]
    logical, numerical, domain = sub_scores
    total = clamp_score((logical + numerical + domain) / 3)
    logger.debug(
        f"Technical scores: logical={logical:.2f} numerical={numerical:.2f} "
        f"domain={domain:.2f} total={total:.2f}"
    )
    return TechnicalScores(
        logical_reasoning=logical,
        numerical_ability=numerical,
        domain_knowledge=domain,
        total_score=total,
    )
