import pytest

from services.readiness_engine.models import InvalidSubmissionError, TechnicalScores, UnknownCategoryError

@pytest.fixture
def session(engine):
    return engine.new_session()

def test_new_session_starts_at_zero(session, content):
    assert session.psychometric_scores == {c.key: 0.0 for c in content.psychometric.categories}
    assert session.wiscar_scores == {c.key: 0.0 for c in content.wiscar.categories}
    assert session.technical_scores == TechnicalScores()

def test_survey_scores_update_after_every_answer(session):
    session.answer_psychometric("interest_0", 5)
    assert session.psychometric_scores["interest"] == 5.0
    session.answer_psychometric("interest_1", 3)
    assert session.psychometric_scores["interest"] == 4.0

    session.answer_wiscar("will_0", 4)
    assert session.wiscar_scores["will"] == 80.0

def test_answers_can_be_overwritten(session):
    session.answer_psychometric("openness_2", 1)
    session.answer_psychometric("openness_2", 4)
    assert session.psychometric.get("openness_2") == 4.0
    assert session.psychometric_scores["openness"] == 4.0

def test_quiz_scores_only_change_on_calculate(session, correct_choice_answers):
    for question_id, value in correct_choice_answers.items():
        session.answer_technical(question_id, value)
    assert session.technical_scores.total_score == 0.0

    scores = session.calculate_technical()
    assert scores.logical_reasoning == 100.0
    assert session.technical_scores.total_score == pytest.approx(200 / 3)

    session.answer_technical("numericalAbility_0", "180")
    assert session.technical_scores.numerical_ability == 0.0
    assert session.calculate_technical().numerical_ability == 50.0

def test_unparseable_numeric_entry_clears_answer(session):
    session.answer_technical("numericalAbility_0", "180")
    session.answer_technical("numericalAbility_0", "one hundred eighty")
    assert "numericalAbility_0" not in session.technical
    assert session.calculate_technical().numerical_ability == 0.0

def test_invalid_answer_is_not_recorded(session):
    session.answer_psychometric("interest_0", 4)
    with pytest.raises(InvalidSubmissionError):
        session.answer_psychometric("interest_1", 9)
    assert "interest_1" not in session.psychometric
    assert session.psychometric_scores["interest"] == 4.0

def test_unknown_quiz_section_rejected_even_when_entry_is_blank(session):
    with pytest.raises(UnknownCategoryError):
        session.answer_technical("spatialReasoning_0", "")

def test_snapshot_has_persisted_shape(session):
    session.answer_wiscar("skill_0", 5)
    dumped = session.snapshot().model_dump(by_alias=True)
    assert set(dumped) == {"psychometric", "technical", "wiscar"}
    assert "overallScore" not in dumped
    assert dumped["wiscar"]["skill"] == 100.0

def test_finalize_makes_session_read_only(session):
    session.answer_psychometric("motivation_0", 3)
    scores = session.finalize()
    assert scores.psychometric["motivation"] == 3.0
    with pytest.raises(InvalidSubmissionError, match="already submitted"):
        session.answer_psychometric("motivation_1", 3)
    with pytest.raises(InvalidSubmissionError):
        session.answer_technical("logicalReasoning_0", 1)
