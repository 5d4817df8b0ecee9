"""
LLM evaluator: asks the model for nine 1..5 scores and short reasons.

One request per page, temperature 0, no retries. Anything that goes wrong
(transport, envelope, content) yields ``None`` and the caller keeps the
heuristic scores.
"""

from __future__ import annotations

import json
import logging
import math
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI

from clarity_backend.config import DEFAULT_MODEL
from clarity_backend.schemas import LENS_DIMENSIONS
from clarity_backend.services.llm_output import (
    LLMEvaluation,
    LLMInvalidJSON,
    LLMSchemaViolation,
    parse_and_validate,
)
from clarity_backend.services.questions import get_questions
from clarity_backend.services.scoring import clamp_score

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a strict evaluator. Return only valid JSON. "
    "Keep reasons short (<= 30 words). Scores are integers 1-5."
)

RESPONSE_SHAPE = """{
  "scores": {
    "user":    {"offer":1-5,"navigation":1-5,"action":1-5},
    "visual":  {"consistency":1-5,"tone":1-5,"environment":1-5},
    "story":   {"purpose":1-5,"emotion":1-5,"identity":1-5}
  },
  "reasons": {
    "user":    {"offer": "...", "navigation": "...", "action": "..."},
    "visual":  {"consistency": "...", "tone": "...", "environment": "..."},
    "story":   {"purpose": "...", "emotion": "...", "identity": "..."}
  }
}"""

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_score(value: Any) -> Optional[int]:
    """
    Read a model-supplied score like ``parseInt`` would, clamped to 1..5.
    Returns None when nothing numeric can be read.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return clamp_score(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return clamp_score(int(value))
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return clamp_score(int(match.group(1)))
    return None


@dataclass
class AIEvaluation:
    # lens -> dimension -> sanitized score (None when unusable)
    scores: Dict[str, Dict[str, Optional[int]]]
    # raw reasons as returned by the model; normalized by the report builder
    reasons: Optional[Dict[str, Any]] = None

    def score(self, lens: str, dimension: str) -> Optional[int]:
        return self.scores.get(lens, {}).get(dimension)


def build_user_prompt(
    text: str,
    context: str | None,
    scope_label: str | None,
    seed: Dict[str, float] | None,
) -> str:
    questions = get_questions(context, scope_label)
    numbered = "\n".join(f"{i + 1}. {q}" for i, q in enumerate(questions))

    return f"""
Evaluate the following page TEXT for clarity. Score each question 1..5 and give a short reason.

QUESTIONS:
{numbered}

If unsure, make a best effort using the text.

Return JSON with shape:
{RESPONSE_SHAPE}

STARTING HINTS (optional, may adjust):
{json.dumps(seed or {}, indent=2)}

TEXT (trimmed):
{text}
""".strip()


def sanitize(parsed: LLMEvaluation) -> AIEvaluation:
    block = parsed.scores
    scores: Dict[str, Dict[str, Optional[int]]] = {}
    for lens, dimensions in LENS_DIMENSIONS.items():
        scores[lens] = {
            dim: coerce_score(block.value(lens, dim)) if block is not None else None
            for dim in dimensions
        }

    reasons = parsed.reasons.model_dump() if parsed.reasons is not None else None
    return AIEvaluation(scores=scores, reasons=reasons)


class AIService:
    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 20.0,
        client: Any = None,
    ):
        self.model = model
        self.temperature = 0.0
        self.timeout = timeout
        # max_retries=0: a failed call falls back to heuristics instead
        self.client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def build_messages(
        self,
        text: str,
        context: str | None,
        scope_label: str | None,
        seed: Dict[str, float] | None,
    ) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_user_prompt(text, context, scope_label, seed)},
        ]

    def _call_openai(self, messages: List[Dict[str, str]]) -> str:
        start = time.time()
        response = self.client.chat.completions.create(
            model=self.model,
            temperature=self.temperature,
            messages=messages,
        )
        logger.info("LLM evaluation took %.2fs (model=%s)", time.time() - start, self.model)

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.debug("LLM usage: %s total tokens", getattr(usage, "total_tokens", "?"))

        choices = getattr(response, "choices", None) or []
        if not choices:
            return "{}"
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None) or "{}"

    def evaluate(
        self,
        text: str,
        context: str | None = "consultancy",
        scope_label: str | None = "",
        seed: Dict[str, float] | None = None,
    ) -> Optional[AIEvaluation]:
        """Score the page with the LLM; None means use heuristics only."""
        messages = self.build_messages(text, context, scope_label, seed)

        try:
            raw_output = self._call_openai(messages)
        except Exception as e:
            logger.warning("LLM request failed (%s): %s", type(e).__name__, e)
            return None

        try:
            parsed = parse_and_validate(raw_output, LLMEvaluation)
        except (LLMInvalidJSON, LLMSchemaViolation) as e:
            logger.warning("LLM output rejected: %s", e)
            return None

        return sanitize(parsed)
