from enum import Enum
from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- Assessment content ---

class ScaleOption(BaseModel):
    value: int
    label: str

class CategoryDefinition(BaseModel):
    key: str
    title: str
    questions: List[str] = Field(..., min_length=1)

    @property
    def question_ids(self) -> List[str]:
        return [f"{self.key}_{index}" for index in range(len(self.questions))]

class SurveyConfig(BaseModel):
    id: str
    name: str
    description: str
    scale: List[ScaleOption] = Field(..., min_length=2)
    categories: List[CategoryDefinition]

    @property
    def scale_values(self) -> List[int]:
        return [option.value for option in self.scale]

    def category(self, key: str) -> CategoryDefinition:
        for category in self.categories:
            if category.key == key:
                return category
        raise KeyError(key)

class ChoiceItem(BaseModel):
    question: str
    options: List[str] = Field(..., min_length=2)
    correct: int # Index into options

    @model_validator(mode='after')
    def _correct_index_in_range(self):
        if not 0 <= self.correct < len(self.options):
            raise ValueError(
                f"Correct option index {self.correct} out of range for question '{self.question}'"
            )
        return self

class NumericItem(BaseModel):
    question: str
    answer: float
    tolerance: float = Field(0.0, ge=0)

AptitudeItem = Union[ChoiceItem, NumericItem]

class AptitudeConfig(BaseModel):
    id: str
    name: str
    description: str
    logical_reasoning: List[ChoiceItem]
    numerical_ability: List[NumericItem]
    domain_knowledge: List[ChoiceItem]

    def sections(self) -> Dict[str, List[AptitudeItem]]:
        """Sub-instrument key (as used in question ids) → items."""
        return {
            'logicalReasoning': self.logical_reasoning,
            'numericalAbility': self.numerical_ability,
            'domainKnowledge': self.domain_knowledge,
        }

class AssessmentContent(BaseModel):
    version: str
    title: str
    psychometric: SurveyConfig
    technical: AptitudeConfig
    wiscar: SurveyConfig

# --- Scores and results ---

class Recommendation(str, Enum):
    PROCEED = "proceed"
    CONDITIONAL = "conditional"
    NOT_RECOMMENDED = "not-recommended"

class TechnicalScores(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    logical_reasoning: float = Field(0.0, alias='logicalReasoning')
    numerical_ability: float = Field(0.0, alias='numericalAbility')
    domain_knowledge: float = Field(0.0, alias='domainKnowledge')
    total_score: float = Field(0.0, alias='totalScore')

    def sub_score(self, key: str) -> float:
        """Looks a score up by its serialized name, e.g. 'domainKnowledge'."""
        for name, field in type(self).model_fields.items():
            if key in (name, field.alias):
                return getattr(self, name)
        raise KeyError(key)

class AssessmentScores(BaseModel):
    """The persisted shape: category scores only, never derived combinations."""
    psychometric: Dict[str, float] = Field(default_factory=dict) # 0-5 scale
    technical: TechnicalScores = Field(default_factory=TechnicalScores)
    wiscar: Dict[str, float] = Field(default_factory=dict) # 0-100 scale

class AssessmentResult(AssessmentScores):
    model_config = ConfigDict(populate_by_name=True)

    overall_score: float = Field(..., alias='overallScore')
    recommendation: Recommendation

class RoleMatch(BaseModel):
    title: str
    description: str
    skills: List[str]
    match: int
    band: str

class LearningStage(BaseModel):
    title: str
    topics: List[str]

class AssessmentReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result: AssessmentResult
    headline: str
    guidance: str
    roles: List[RoleMatch]
    learning_path: List[LearningStage] = Field(..., alias='learningPath')

# Custom Error Classes
class IncompleteAssessmentError(ValueError):
    """No stored assessment exists; the caller should restart the session."""
    pass

class InvalidSubmissionError(ValueError):
    """Submission data does not fit the content (bad question id, index or value)."""
    pass

class UnknownCategoryError(InvalidSubmissionError):
    """A question id references a category the content does not define."""
    pass

class ContentValidationError(ValueError):
    """Assessment content failed validation beyond the pydantic schema."""
    pass
