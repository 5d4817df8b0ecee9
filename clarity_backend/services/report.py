"""
Merge heuristic and LLM scores into the final report and pick quick wins.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from clarity_backend.schemas import (
    LENS_DIMENSIONS,
    REASON_MAX_CHARS,
    ClarityReasons,
    ClarityReport,
    ClarityScores,
    QuickWin,
)
from clarity_backend.services.ai_service import AIEvaluation
from clarity_backend.services.heuristics import HeuristicVector
from clarity_backend.services.questions import DEFAULT_SCOPE
from clarity_backend.services.scoring import to_five_point

logger = logging.getLogger(__name__)

QUICK_WIN_COUNT = 2

QUICK_WIN_TEMPLATES = {
    "user": (
        "Clarify next steps on {scope}",
        "Add a single primary CTA above the fold and repeat it near the footer. "
        "Use a clear verb (Book a call, Get a quote).",
    ),
    "visual": (
        "Tighten visual consistency on {scope}",
        "Limit colors to 1–2 accents, unify button styles, and increase spacing "
        "between sections to reduce noise.",
    ),
    "story": (
        "State the value in plain words on {scope}",
        "Replace jargon with a one-sentence promise and add one proof point "
        "(metric, client name, or outcome).",
    ),
}


def merge_scores(
    heuristics: HeuristicVector,
    evaluation: Optional[AIEvaluation] = None,
) -> ClarityScores:
    """LLM score wins per sub-dimension; otherwise the mapped heuristic."""
    merged: Dict[str, Dict[str, int]] = {}
    llm_used = 0
    for lens, dimensions in LENS_DIMENSIONS.items():
        merged[lens] = {}
        for dim in dimensions:
            score = evaluation.score(lens, dim) if evaluation is not None else None
            if score is None:
                score = to_five_point(heuristics.get(lens, dim))
            else:
                llm_used += 1
            merged[lens][dim] = score

    logger.debug("Merged scores: %d/9 from LLM", llm_used)
    return ClarityScores(**merged)


def _short(value: Any) -> str:
    return value[:REASON_MAX_CHARS] if isinstance(value, str) else ""


def normalize_reasons(raw: Any) -> ClarityReasons:
    out: Dict[str, Dict[str, str]] = {}
    for lens, dimensions in LENS_DIMENSIONS.items():
        block = raw.get(lens) if isinstance(raw, dict) else None
        out[lens] = {
            dim: _short(block.get(dim)) if isinstance(block, dict) else ""
            for dim in dimensions
        }
    return ClarityReasons(**out)


def lens_means(scores: ClarityScores) -> Dict[str, float]:
    means = {}
    for lens, dimensions in LENS_DIMENSIONS.items():
        block = getattr(scores, lens)
        values = [getattr(block, dim) for dim in dimensions]
        means[lens] = sum(values) / len(values)
    return means


def weakest_lenses(scores: ClarityScores, count: int = QUICK_WIN_COUNT) -> List[str]:
    means = lens_means(scores)
    # sorted() is stable, so ties keep user, visual, story order
    return sorted(means, key=lambda lens: means[lens])[:count]


def make_quick_wins(scores: ClarityScores, scope_label: str | None = "") -> List[QuickWin]:
    scope = (scope_label or "").strip() or DEFAULT_SCOPE
    wins = []
    for lens in weakest_lenses(scores):
        title, tip = QUICK_WIN_TEMPLATES[lens]
        wins.append(QuickWin(title=title.format(scope=scope), tip=tip))
    return wins


def build_report(
    heuristics: HeuristicVector,
    evaluation: Optional[AIEvaluation] = None,
    scope_label: str | None = "",
) -> ClarityReport:
    scores = merge_scores(heuristics, evaluation)
    reasons = normalize_reasons(evaluation.reasons if evaluation is not None else None)
    return ClarityReport(
        scores=scores,
        reasons=reasons,
        quick_wins=make_quick_wins(scores, scope_label),
    )
