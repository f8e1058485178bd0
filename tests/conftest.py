import pytest

from services.readiness_engine.engine import AssessmentEngine
from services.readiness_engine.models import AssessmentScores, TechnicalScores
from services.readiness_engine.storage import InMemoryResultStore

@pytest.fixture(scope="session")
def engine():
    """Engine loaded with the bundled waste-management content."""
    return AssessmentEngine()

@pytest.fixture(scope="session")
def content(engine):
    return engine.content

@pytest.fixture
def store():
    return InMemoryResultStore()

def _top_answers(survey):
    return {qid: max(survey.scale_values) for category in survey.categories for qid in category.question_ids}

@pytest.fixture
def top_psychometric_answers(content):
    """Every psychometric question answered at the top of the scale."""
    return _top_answers(content.psychometric)

@pytest.fixture
def top_wiscar_answers(content):
    """Every WISCAR question answered at the top of the scale."""
    return _top_answers(content.wiscar)

@pytest.fixture
def correct_choice_answers(content):
    """Correct option index for every choice item; numeric items left unanswered."""
    answers = {}
    for section_key, items in content.technical.sections().items():
        for index, item in enumerate(items):
            if hasattr(item, "correct"):
                answers[f"{section_key}_{index}"] = item.correct
    return answers

@pytest.fixture
def sample_scores():
    """Scores for the reference scenario: traits avg 4, aptitude 80, WISCAR avg 75."""
    return AssessmentScores(
        psychometric={
            "interest": 4.0, "conscientiousness": 4.0, "agreeableness": 4.0,
            "openness": 4.0, "motivation": 4.0, "persistence": 4.0,
        },
        technical=TechnicalScores(
            logical_reasoning=60.0, numerical_ability=100.0, domain_knowledge=80.0, total_score=80.0,
        ),
        wiscar={
            "will": 75.0, "interest": 75.0, "skill": 80.0,
            "cognitiveReadiness": 70.0, "abilityToLearn": 75.0, "realWorldAlignment": 75.0,
        },
    )
