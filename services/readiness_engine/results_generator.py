# services/readiness_engine/results_generator.py
# Combines instrument scores into the overall score, recommendation, role
# matches and the descriptive report.

import logging
import math
from typing import Dict, List, Mapping, Tuple

from .models import (
    AssessmentReport,
    AssessmentResult,
    AssessmentScores,
    LearningStage,
    Recommendation,
    RoleMatch,
)
from .responses import Instrument
from .scorer import clamp_score

logger = logging.getLogger(__name__)

# --- Policy constants ---

OVERALL_WEIGHTS = {
    Instrument.PSYCHOMETRIC: 0.30,
    Instrument.TECHNICAL: 0.40,
    Instrument.WISCAR: 0.30,
}

# Psychometric categories are stored on 0-5; this lifts them to 0-100.
PSYCHOMETRIC_PERCENT_FACTOR = 20.0

PROCEED_THRESHOLD = 70.0
CONDITIONAL_THRESHOLD = 40.0

STRONG_MATCH_THRESHOLD = 70
MODERATE_MATCH_THRESHOLD = 40

RECOMMENDATION_TEXT = {
    Recommendation.PROCEED: {
        "headline": "YES - You are well-suited for a career in waste management!",
        "guidance": "You demonstrate strong alignment with waste management careers. Start targeted learning immediately!",
    },
    Recommendation.CONDITIONAL: {
        "headline": "MAYBE - You have potential with some development needed.",
        "guidance": "You have potential but should focus on developing key skills and knowledge areas.",
    },
    Recommendation.NOT_RECOMMENDED: {
        "headline": "NO - Consider foundational learning before specializing.",
        "guidance": "Consider foundational studies in environmental science before specializing in waste management.",
    },
}

# Each role's match is the mean of exactly two category scores.
CAREER_ROLES = [
    {
        "title": "Waste Management Specialist",
        "description": "Oversee waste collection and processing systems",
        "skills": ["Waste segregation", "Regulations", "Data analysis"],
        "factors": [(Instrument.TECHNICAL, "totalScore"), (Instrument.WISCAR, "skill")],
    },
    {
        "title": "Recycling Coordinator",
        "description": "Manage recycling programs and community outreach",
        "skills": ["Public engagement", "Logistics", "Program management"],
        "factors": [(Instrument.PSYCHOMETRIC, "agreeableness"), (Instrument.WISCAR, "realWorldAlignment")],
    },
    {
        "title": "Environmental Compliance Officer",
        "description": "Ensure adherence to environmental laws",
        "skills": ["Law knowledge", "Inspection", "Reporting"],
        "factors": [(Instrument.PSYCHOMETRIC, "conscientiousness"), (Instrument.TECHNICAL, "domainKnowledge")],
    },
    {
        "title": "Sustainability Consultant",
        "description": "Advise companies on waste reduction & green policies",
        "skills": ["Consulting", "Policy", "Data analysis"],
        "factors": [(Instrument.WISCAR, "cognitiveReadiness"), (Instrument.PSYCHOMETRIC, "openness")],
    },
]

LEARNING_PATH = [
    {
        "title": "Foundation",
        "topics": [
            "Environmental science fundamentals",
            "Waste hierarchy concepts",
            "Basic recycling principles",
            "Sustainability introduction",
        ],
    },
    {
        "title": "Specialization",
        "topics": [
            "Regulatory frameworks (EPA, RCRA)",
            "Waste processing technologies",
            "Environmental impact assessment",
            "Hazardous waste management",
        ],
    },
    {
        "title": "Professional",
        "topics": [
            "Project management",
            "Data analytics & reporting",
            "Certified Waste Manager (CWM)",
            "Industry certifications",
        ],
    },
]

# --- Combination ---

def mean_score(scores: Mapping[str, float]) -> float:
    """Unweighted mean across categories; 0 for an instrument with no categories."""
    if not scores:
        return 0.0
    return sum(scores.values()) / len(scores)

def combine_overall(
    psychometric_scores: Mapping[str, float],
    technical_total: float,
    wiscar_scores: Mapping[str, float],
) -> float:
    """Weighted 0-100 readiness score.

    psychometric_scores are on the 0-5 scale and are converted here, once.
    wiscar_scores are already 0-100.
    """
    overall = (
        mean_score(psychometric_scores) * PSYCHOMETRIC_PERCENT_FACTOR * OVERALL_WEIGHTS[Instrument.PSYCHOMETRIC]
        + technical_total * OVERALL_WEIGHTS[Instrument.TECHNICAL]
        + mean_score(wiscar_scores) * OVERALL_WEIGHTS[Instrument.WISCAR]
    )
    return clamp_score(overall)

def classify_recommendation(overall: float) -> Recommendation:
    if overall >= PROCEED_THRESHOLD:
        return Recommendation.PROCEED
    if overall >= CONDITIONAL_THRESHOLD:
        return Recommendation.CONDITIONAL
    return Recommendation.NOT_RECOMMENDED

def evaluate_scores(scores: AssessmentScores) -> AssessmentResult:
    """Derives overall score and recommendation. Pure; safe to call on every read."""
    overall = combine_overall(scores.psychometric, scores.technical.total_score, scores.wiscar)
    recommendation = classify_recommendation(overall)
    logger.debug(f"Overall score {overall:.3f} -> {recommendation.value}")
    return AssessmentResult(
        psychometric=dict(scores.psychometric),
        technical=scores.technical.model_copy(),
        wiscar=dict(scores.wiscar),
        overall_score=overall,
        recommendation=recommendation,
    )

# --- Role matching ---

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def resolve_factor(scores: AssessmentScores, instrument: Instrument, key: str) -> float:
    """A single category score on the 0-100 scale. Missing categories count as 0."""
    if instrument is Instrument.PSYCHOMETRIC:
        return scores.psychometric.get(key, 0.0) * PSYCHOMETRIC_PERCENT_FACTOR
    if instrument is Instrument.WISCAR:
        return scores.wiscar.get(key, 0.0)
    return scores.technical.sub_score(key)

def match_band(match: int) -> str:
    if match >= STRONG_MATCH_THRESHOLD:
        return "strong"
    if match >= MODERATE_MATCH_THRESHOLD:
        return "moderate"
    return "weak"

def match_roles(scores: AssessmentScores) -> List[RoleMatch]:
    matches = []
    for role in CAREER_ROLES:
        factors: List[Tuple[Instrument, str]] = role["factors"]
        values = [resolve_factor(scores, instrument, key) for instrument, key in factors]
        match = round_half_up(sum(values) / len(values))
        matches.append(RoleMatch(
            title=role["title"],
            description=role["description"],
            skills=list(role["skills"]),
            match=match,
            band=match_band(match),
        ))
    return matches

# --- Report ---

def generate_report(scores: AssessmentScores) -> AssessmentReport:
    """Builds the full results view from stored category scores."""
    result = evaluate_scores(scores)
    text: Dict[str, str] = RECOMMENDATION_TEXT[result.recommendation]
    return AssessmentReport(
        result=result,
        headline=text["headline"],
        guidance=text["guidance"],
        roles=match_roles(scores),
        learning_path=[LearningStage(**stage) for stage in LEARNING_PATH],
    )
