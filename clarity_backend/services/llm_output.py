import json
from typing import Any, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)


class LLMInvalidJSON(ValueError):
    """Raised when model output is not valid JSON."""


class LLMSchemaViolation(ValueError):
    """Raised when JSON is valid but does not match schema."""


# Partial shapes: every field optional and untyped, sanitized downstream.
class LLMUserBlock(BaseModel):
    offer: Any = None
    navigation: Any = None
    action: Any = None


class LLMVisualBlock(BaseModel):
    consistency: Any = None
    tone: Any = None
    environment: Any = None


class LLMStoryBlock(BaseModel):
    purpose: Any = None
    emotion: Any = None
    identity: Any = None


class LLMLensBlock(BaseModel):
    user: Optional[LLMUserBlock] = None
    visual: Optional[LLMVisualBlock] = None
    story: Optional[LLMStoryBlock] = None

    def value(self, lens: str, dimension: str) -> Any:
        block = getattr(self, lens, None)
        return getattr(block, dimension, None) if block is not None else None


class LLMEvaluation(BaseModel):
    scores: Optional[LLMLensBlock] = None
    reasons: Optional[LLMLensBlock] = None


def parse_and_validate(raw_output: str, schema: Type[T]) -> T:
    """
    Parse raw LLM output as JSON and validate against a Pydantic schema.

    Produces one exception type per failure level so callers can log
    which level broke.
    """
    try:
        data = json.loads(raw_output)
    except (json.JSONDecodeError, TypeError) as e:
        raise LLMInvalidJSON("LLM returned invalid JSON") from e

    if not isinstance(data, dict):
        raise LLMSchemaViolation("LLM JSON is not an object")

    try:
        return schema(**data)
    except ValidationError as e:
        raise LLMSchemaViolation("LLM JSON did not match schema") from e
