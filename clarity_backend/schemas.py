from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Tuple


# Lens -> sub-dimensions, in enumeration order (ties in quick wins keep it)
LENS_DIMENSIONS: Dict[str, Tuple[str, ...]] = {
    "user": ("offer", "navigation", "action"),
    "visual": ("consistency", "tone", "environment"),
    "story": ("purpose", "emotion", "identity"),
}

REASON_MAX_CHARS = 220


# Request models
class ClientMetrics(BaseModel):
    """Pre-computed [0,1] scores from the client-side visual analyzer."""
    model_config = ConfigDict(populate_by_name=True)

    visual_consistency: Optional[float] = Field(None, alias="visualConsistency")
    visual_tone: Optional[float] = Field(None, alias="visualTone")
    visual_environment: Optional[float] = Field(None, alias="visualEnvironment")
    story_emotion: Optional[float] = Field(None, alias="storyEmotion")
    story_identity: Optional[float] = Field(None, alias="storyIdentity")


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    context: Optional[str] = "consultancy"
    scope_label: Optional[str] = Field("", alias="scopeLabel")
    client_metrics: Optional[ClientMetrics] = Field(None, alias="clientMetrics")


# Response models
class UserScores(BaseModel):
    offer: int = Field(ge=1, le=5)
    navigation: int = Field(ge=1, le=5)
    action: int = Field(ge=1, le=5)


class VisualScores(BaseModel):
    consistency: int = Field(ge=1, le=5)
    tone: int = Field(ge=1, le=5)
    environment: int = Field(ge=1, le=5)


class StoryScores(BaseModel):
    purpose: int = Field(ge=1, le=5)
    emotion: int = Field(ge=1, le=5)
    identity: int = Field(ge=1, le=5)


class ClarityScores(BaseModel):
    user: UserScores
    visual: VisualScores
    story: StoryScores


class UserReasons(BaseModel):
    offer: str = Field("", max_length=REASON_MAX_CHARS)
    navigation: str = Field("", max_length=REASON_MAX_CHARS)
    action: str = Field("", max_length=REASON_MAX_CHARS)


class VisualReasons(BaseModel):
    consistency: str = Field("", max_length=REASON_MAX_CHARS)
    tone: str = Field("", max_length=REASON_MAX_CHARS)
    environment: str = Field("", max_length=REASON_MAX_CHARS)


class StoryReasons(BaseModel):
    purpose: str = Field("", max_length=REASON_MAX_CHARS)
    emotion: str = Field("", max_length=REASON_MAX_CHARS)
    identity: str = Field("", max_length=REASON_MAX_CHARS)


class ClarityReasons(BaseModel):
    user: UserReasons = Field(default_factory=UserReasons)
    visual: VisualReasons = Field(default_factory=VisualReasons)
    story: StoryReasons = Field(default_factory=StoryReasons)


class QuickWin(BaseModel):
    title: str
    tip: str


class ClarityReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    scores: ClarityScores
    reasons: ClarityReasons = Field(default_factory=ClarityReasons)
    quick_wins: List[QuickWin] = Field(default_factory=list, alias="quickWins")


class QuestionsResponse(BaseModel):
    context: str
    questions: List[str]


class ErrorResponse(BaseModel):
    error: str
