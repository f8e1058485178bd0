from fastapi import APIRouter, HTTPException, Depends, status
from functools import lru_cache
import logging

from config.settings import assessment_settings
from src.schemas.assessment import AssessmentSubmission, QuestionListing
from src.services.storage import shared_result_store
from services.readiness_engine.engine import AssessmentEngine
from services.readiness_engine.models import (
    AssessmentReport,
    AssessmentScores,
    IncompleteAssessmentError,
    InvalidSubmissionError,
)
from services.readiness_engine.storage import ResultStore, StorageError

router = APIRouter()
logger = logging.getLogger(__name__)

@lru_cache(maxsize=1)
def get_assessment_engine() -> AssessmentEngine:
    return AssessmentEngine(config_path=assessment_settings.content_path)

def get_result_store() -> ResultStore:
    return shared_result_store(assessment_settings)

@router.get("/assessment/questions", response_model=QuestionListing)
async def list_questions(engine: AssessmentEngine = Depends(get_assessment_engine)):
    return engine.get_questions()

@router.post("/assessment/submit", response_model=AssessmentScores, status_code=status.HTTP_201_CREATED)
async def submit_assessment(
    submission: AssessmentSubmission,
    engine: AssessmentEngine = Depends(get_assessment_engine),
    store: ResultStore = Depends(get_result_store),
):
    """
    Scores all three instruments and stores the category scores.
    Overall score and recommendation are not stored; see /assessment/results.
    """
    try:
        scores = engine.score_responses(
            submission.psychometric,
            submission.technical,
            submission.wiscar,
        )
        engine.submit(store, scores)
    except InvalidSubmissionError as e:
        logger.error(f"Invalid submission: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        logger.error(f"Result store unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    logger.info(f"Assessment submission processed. Technical total: {scores.technical.total_score:.2f}")
    return scores

@router.get("/assessment/results", response_model=AssessmentReport)
async def get_results(
    engine: AssessmentEngine = Depends(get_assessment_engine),
    store: ResultStore = Depends(get_result_store),
):
    """
    Recomputes overall score, recommendation and role matches from the stored scores.
    404 means the session is incomplete and the client should restart the assessment.
    """
    try:
        return engine.load_results(store)
    except IncompleteAssessmentError as e:
        logger.warning(f"Incomplete assessment: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        logger.error(f"Result store unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))
