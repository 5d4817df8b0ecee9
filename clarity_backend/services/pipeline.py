"""
Request pipeline: fetch -> heuristics -> LLM evaluation -> report.

Each stage returns a StageResult instead of raising, and ``analyze`` decides
the final report from the combined outcomes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from clarity_backend.schemas import AnalyzeRequest, ClarityReport
from clarity_backend.services.ai_service import AIEvaluation, AIService
from clarity_backend.services.heuristics import HeuristicVector, build_heuristics
from clarity_backend.services.page_service import PageContent, PageService, is_fetchable
from clarity_backend.services.report import build_report

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class StageResult(Generic[V]):
    ok: bool
    value: V
    skipped: bool = False
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "StageResult":
        return cls(ok=True, value=value)

    @classmethod
    def skip(cls, value: Any, reason: str) -> "StageResult":
        return cls(ok=True, value=value, skipped=True, error=reason)

    @classmethod
    def fallback(cls, value: Any, error: str) -> "StageResult":
        return cls(ok=False, value=value, error=error)


def fetch_stage(url: Optional[str], page_service: PageService) -> StageResult[PageContent]:
    if not url:
        return StageResult.skip(PageContent(), "no url")
    if not is_fetchable(url):
        return StageResult.skip(PageContent(), "url is not http(s)")

    try:
        return StageResult.success(page_service.fetch(url))
    except Exception as e:
        logger.warning("Page fetch failed for %s (%s): %s", url, type(e).__name__, e)
        return StageResult.fallback(PageContent(), f"fetch failed: {type(e).__name__}")


def heuristic_stage(page: PageContent, request: AnalyzeRequest) -> StageResult[HeuristicVector]:
    return StageResult.success(build_heuristics(page.text, page.html, request.client_metrics))


def evaluation_stage(
    page: PageContent,
    request: AnalyzeRequest,
    heuristics: HeuristicVector,
    ai_service: Optional[AIService],
) -> StageResult[Optional[AIEvaluation]]:
    if ai_service is None:
        return StageResult.skip(None, "LLM evaluator not configured")
    if page.empty:
        return StageResult.skip(None, "no page content")

    evaluation = ai_service.evaluate(
        page.text,
        context=request.context,
        scope_label=request.scope_label,
        seed=heuristics.seed(),
    )
    if evaluation is None:
        return StageResult.fallback(None, "LLM evaluation unavailable")
    return StageResult.success(evaluation)


def analyze(
    request: AnalyzeRequest,
    page_service: PageService,
    ai_service: Optional[AIService] = None,
) -> ClarityReport:
    fetched = fetch_stage(request.url, page_service)
    heuristics = heuristic_stage(fetched.value, request)
    evaluated = evaluation_stage(fetched.value, request, heuristics.value, ai_service)

    logger.info(
        "Analysis for %s: fetch=%s, llm=%s",
        request.url or "(no url)",
        _describe(fetched),
        _describe(evaluated),
    )
    return build_report(heuristics.value, evaluated.value, request.scope_label)


def _describe(result: StageResult) -> str:
    if result.skipped:
        return f"skipped ({result.error})"
    return "ok" if result.ok else f"fallback ({result.error})"
