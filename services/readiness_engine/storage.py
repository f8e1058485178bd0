import logging
from typing import Optional, Protocol

from .models import AssessmentScores

logger = logging.getLogger(__name__)

class ResultStore(Protocol):
    """Key-value persistence for one session's category scores."""

    def load(self) -> Optional[AssessmentScores]:
        ...

    def save(self, scores: AssessmentScores) -> None:
        ...

class StorageError(RuntimeError):
    """The backing store could not be read or written."""
    pass

class InMemoryResultStore:
    """Process-local store. Holds the serialized form so reads never alias the saved object."""

    def __init__(self):
        self._payload: Optional[str] = None

    def load(self) -> Optional[AssessmentScores]:
        if self._payload is None:
            return None
        return AssessmentScores.model_validate_json(self._payload)

    def save(self, scores: AssessmentScores) -> None:
        self._payload = scores.model_dump_json(by_alias=True)
        logger.debug("Stored assessment scores in memory.")
