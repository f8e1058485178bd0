import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from src.routers.assessment import router as assessment_router, get_assessment_engine, get_result_store
from services.readiness_engine.engine import AssessmentEngine
from services.readiness_engine.storage import InMemoryResultStore, StorageError

# Create a FastAPI app instance and include the router for testing
app = FastAPI()
app.include_router(assessment_router, prefix="/api/v1")

client = TestClient(app)

@pytest.fixture
def memory_store():
    store = InMemoryResultStore()
    app.dependency_overrides[get_assessment_engine] = lambda: AssessmentEngine()
    app.dependency_overrides[get_result_store] = lambda: store
    yield store
    app.dependency_overrides.clear()

FULL_SUBMISSION = {
    "psychometric": {f"{key}_{i}": 4 for key in
                     ["interest", "conscientiousness", "agreeableness", "openness", "motivation", "persistence"]
                     for i in range(3)},
    "technical": {
        "logicalReasoning_0": 1, "logicalReasoning_1": 2, "logicalReasoning_2": 1,
        "numericalAbility_0": "180", "numericalAbility_1": "not a number",
        "domainKnowledge_0": 1, "domainKnowledge_1": 1, "domainKnowledge_2": 0,
    },
    "wiscar": {f"{key}_{i}": 4 for key in
               ["will", "interest", "skill", "cognitiveReadiness", "abilityToLearn", "realWorldAlignment"]
               for i in range(4)},
}

# --- Test Cases ---

def test_results_before_submission_is_404(memory_store):
    """No stored result → 404 so the client restarts the assessment"""
    response = client.get("/api/v1/assessment/results")
    assert response.status_code == 404

def test_submit_then_read_results(memory_store):
    response = client.post("/api/v1/assessment/submit", json=FULL_SUBMISSION)
    assert response.status_code == 201
    stored = response.json()
    assert stored["psychometric"]["interest"] == 4.0
    assert stored["wiscar"]["skill"] == 80.0
    assert stored["technical"]["logicalReasoning"] == 100.0
    assert stored["technical"]["numericalAbility"] == 50.0
    assert stored["technical"]["domainKnowledge"] == pytest.approx(200 / 3)
    assert "overallScore" not in stored

    response = client.get("/api/v1/assessment/results")
    assert response.status_code == 200
    report = response.json()
    # 80*0.3 + ((100 + 50 + 66.67)/3)*0.4 + 80*0.3
    assert report["result"]["overallScore"] == pytest.approx(24 + (650 / 9) * 0.4 + 24)
    assert report["result"]["recommendation"] == "proceed"
    assert len(report["roles"]) == 4
    assert report["learningPath"][0]["title"] == "Foundation"

def test_submit_unknown_category_is_400(memory_store):
    response = client.post("/api/v1/assessment/submit", json={"psychometric": {"curiosity_0": 3}})
    assert response.status_code == 400
    assert "curiosity" in response.json()["detail"]
    assert memory_store.load() is None

@pytest.mark.parametrize("technical", [{"spatialReasoning_0": ""}, {"bogus": None}])
def test_submit_unknown_quiz_id_with_blank_entry_is_400(memory_store, technical):
    response = client.post("/api/v1/assessment/submit", json={"technical": technical})
    assert response.status_code == 400
    assert memory_store.load() is None

def test_submit_out_of_scale_value_is_400(memory_store):
    response = client.post("/api/v1/assessment/submit", json={"wiscar": {"will_0": 7}})
    assert response.status_code == 400

def test_store_failure_is_503():
    failing_store = MagicMock()
    failing_store.load.side_effect = StorageError("redis down")
    failing_store.save.side_effect = StorageError("redis down")
    app.dependency_overrides[get_result_store] = lambda: failing_store
    try:
        assert client.get("/api/v1/assessment/results").status_code == 503
        assert client.post("/api/v1/assessment/submit", json={}).status_code == 503
    finally:
        app.dependency_overrides.clear()

def test_list_questions():
    response = client.get("/api/v1/assessment/questions")
    assert response.status_code == 200
    body = response.json()
    assert len(body["psychometric"]) == 18
    assert body["technical"][0]["options"]
