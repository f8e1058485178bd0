from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field

class AssessmentSubmission(BaseModel):
    psychometric: Dict[str, int] = Field(default_factory=dict)  # question_id → Likert point
    technical: Dict[str, Optional[Union[float, str]]] = Field(default_factory=dict)  # question_id → option index or raw entry
    wiscar: Dict[str, int] = Field(default_factory=dict)  # question_id → Likert point

class QuestionEntry(BaseModel):
    id: str
    category: str
    text: str
    kind: Optional[str] = None
    options: Optional[List[str]] = None

class QuestionListing(BaseModel):
    psychometric: List[QuestionEntry]
    technical: List[QuestionEntry]
    wiscar: List[QuestionEntry]
