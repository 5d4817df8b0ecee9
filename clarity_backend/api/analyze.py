import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from clarity_backend.config import AppConfig, get_config
from clarity_backend.schemas import AnalyzeRequest, ClarityReport, ErrorResponse, QuestionsResponse
from clarity_backend.services.ai_service import AIService
from clarity_backend.services.page_service import PageService
from clarity_backend.services.pipeline import analyze
from clarity_backend.services.questions import get_questions, resolve_context

logger = logging.getLogger(__name__)

router = APIRouter()


def get_page_service(config: AppConfig = Depends(get_config)) -> PageService:
    return PageService(timeout=config.fetch_timeout, user_agent=config.user_agent)


def get_ai_service(config: AppConfig = Depends(get_config)) -> Optional[AIService]:
    """No API key means heuristic-only scoring."""
    if not config.llm_enabled:
        return None
    return _cached_ai_service(config.openai_api_key, config.openai_model, config.llm_timeout)


@lru_cache(maxsize=8)
def _cached_ai_service(api_key: str, model: str, timeout: float) -> AIService:
    # One OpenAI client (and connection pool) per distinct setting
    return AIService(api_key=api_key, model=model, timeout=timeout)


@router.post(
    "/analyze",
    response_model=ClarityReport,
    responses={500: {"model": ErrorResponse}},
)
def analyze_page(
    request: Optional[AnalyzeRequest] = None,
    page_service: PageService = Depends(get_page_service),
    ai_service: Optional[AIService] = Depends(get_ai_service),
):
    """Score a page's clarity on nine sub-dimensions and suggest two quick wins"""
    request = request or AnalyzeRequest()
    try:
        return analyze(request, page_service, ai_service)
    except Exception as e:
        logger.exception("Error analyzing %s", request.url)
        return JSONResponse(status_code=500, content={"error": str(e) or "Analysis failed"})


@router.get("/questions", response_model=QuestionsResponse)
def list_questions(
    context: Optional[str] = None,
    scope_label: str = Query("", alias="scopeLabel"),
):
    """The nine questions the evaluator answers for a vertical"""
    return QuestionsResponse(
        context=resolve_context(context),
        questions=get_questions(context, scope_label),
    )
