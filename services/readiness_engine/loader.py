import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from services.readiness_engine.models import AssessmentContent, ContentValidationError, SurveyConfig

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_PATH = Path(__file__).resolve().parents[2] / "assets" / "assessment_content.yml"

def _validate_survey(survey: SurveyConfig) -> None:
    category_keys = set()
    for category in survey.categories:
        if category.key in category_keys:
            raise ContentValidationError(f"Duplicate category key '{category.key}' in '{survey.id}'")
        # Question ids are '<key>_<index>', split on the last underscore.
        if not category.key or '_' in category.key:
            raise ContentValidationError(
                f"Category key '{category.key}' in '{survey.id}' must be non-empty and contain no '_'"
            )
        category_keys.add(category.key)

    scale_values = survey.scale_values
    if len(set(scale_values)) != len(scale_values):
        raise ContentValidationError(f"Duplicate scale values in '{survey.id}': {scale_values}")
    if min(scale_values) < 1:
        raise ContentValidationError(f"Scale values in '{survey.id}' must be positive: {scale_values}")

def load_content_data(data: Dict[str, Any]) -> AssessmentContent:
    """
    Validates the raw dictionary against the AssessmentContent model
    and performs the checks pydantic cannot express.
    """
    try:
        content = AssessmentContent.model_validate(data)
    except ValidationError as e:
        raise ContentValidationError(f"Assessment content failed schema validation: {e}") from e

    if content.psychometric.id != "psychometric" or content.wiscar.id != "wiscar" or content.technical.id != "technical":
        raise ContentValidationError(
            "Instrument ids must be 'psychometric', 'technical' and 'wiscar'"
        )
    _validate_survey(content.psychometric)
    _validate_survey(content.wiscar)

    for section_key, items in content.technical.sections().items():
        if not items:
            raise ContentValidationError(f"Aptitude section '{section_key}' has no items")

    return content

def load_content_from_file(file_path: Union[str, Path]) -> AssessmentContent:
    """
    Loads assessment content from a YAML file, validates it,
    and returns an AssessmentContent object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ContentValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise ContentValidationError(f"Error parsing YAML file {file_path}: {e}")

    if not isinstance(data, dict):
        raise ContentValidationError(f"YAML file is empty or invalid: {file_path}")

    content = load_content_data(data)
    logger.info(f"Loaded assessment content '{content.title}' v{content.version} from {file_path}")
    return content
