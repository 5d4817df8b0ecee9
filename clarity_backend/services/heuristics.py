"""
Rule-based clarity heuristics.

Every function returns a value in [0, 1] and has a fixed default for empty
input, so a report can always be built even when the page fetch failed.
These are rough, free signals: the LLM evaluator (when configured) refines
them, and they are passed to it as starting hints.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

from clarity_backend.schemas import ClientMetrics


JARGON = (
    'synergy', 'leverage', 'cutting-edge', 'turnkey', 'mission-critical', 'scalable',
    'best-in-class', 'bleeding edge', 'paradigm', 'holistic', 'world-class',
    'ecosystem', 'framework', 'innovative solutions',
)

KEY_LINKS = ('services', 'pricing', 'about', 'contact', 'work', 'cases')

CTA_PATTERN = re.compile(
    r'(book|contact|get\s?a\s?quote|get\s+started|start\s+now|try\s+it|buy\s+now'
    r'|add\s+to\s+cart|schedule|demo)',
    re.IGNORECASE,
)
BUTTON_PATTERN = re.compile(r'<button|class="btn|class=\'btn', re.IGNORECASE)
SENTENCE_SPLIT = re.compile(r'[.!?]')
WHY_PATTERN = re.compile(r'(why|mission|we exist|we believe|our story|purpose)', re.IGNORECASE)
WHO_PATTERN = re.compile(r'(we|our team|founded|handmade|crafted|designed)', re.IGNORECASE)

DEFAULT_VISUAL = 0.5
SHORT_SENTENCE_WORDS = 12


def clamp01(x: float) -> float:
    return 0.0 if x < 0 else 1.0 if x > 1 else x


def count_jargon(text: str) -> int:
    lower = (text or '').lower()
    return sum(1 for term in JARGON if term in lower)


def offer_clarity(text: str) -> float:
    """Reward short, headline-like sentences; penalize jargon."""
    if not text:
        return 0.4
    sentences = [s.strip() for s in SENTENCE_SPLIT.split(text)]
    sentences = [s for s in sentences if s]
    short = len([s for s in sentences if len(s.split(' ')) <= SHORT_SENTENCE_WORDS])

    score = min(1.0, short / 10)
    score -= min(0.5, count_jargon(text) * 0.05)
    return clamp01(score)


def navigation_clarity(html: str) -> float:
    if not html:
        return 0.4
    lower = html.lower()
    has_menu = '<nav' in lower or 'menu' in lower
    key_links = len([k for k in KEY_LINKS if k in lower])

    score = 0.2 + (0.3 if has_menu else 0) + min(0.5, key_links * 0.1)
    return clamp01(score)


def action_clarity(html: str) -> float:
    if not html:
        return 0.3
    cta_hits = len(CTA_PATTERN.findall(html))
    button_hits = len(BUTTON_PATTERN.findall(html))

    score = 0.2 + min(0.5, cta_hits * 0.2) + min(0.3, button_hits * 0.05)
    return clamp01(score)


def story_purpose(text: str) -> float:
    if not text:
        return 0.4
    has_why = WHY_PATTERN.search(text) is not None
    has_who = WHO_PATTERN.search(text) is not None

    score = 0.3 + (0.3 if has_why else 0) + (0.2 if has_who else 0)
    return clamp01(score)


@dataclass(frozen=True)
class HeuristicVector:
    """Nine [0,1] values keyed like the report's score shape."""

    user_offer: float
    user_navigation: float
    user_action: float
    visual_consistency: float = DEFAULT_VISUAL
    visual_tone: float = DEFAULT_VISUAL
    visual_environment: float = DEFAULT_VISUAL
    story_purpose: float = 0.4
    story_emotion: float = DEFAULT_VISUAL
    story_identity: float = DEFAULT_VISUAL

    def get(self, lens: str, dimension: str) -> float:
        return getattr(self, f"{lens}_{dimension}")

    def seed(self) -> Dict[str, float]:
        # Only the values actually measured from the page are useful hints
        return {
            "user_offer": self.user_offer,
            "user_navigation": self.user_navigation,
            "user_action": self.user_action,
            "story_purpose": self.story_purpose,
        }


def _metric(value: Optional[float]) -> float:
    return DEFAULT_VISUAL if value is None else value


def build_heuristics(
    text: str = "",
    html: str = "",
    client_metrics: Optional[ClientMetrics] = None,
) -> HeuristicVector:
    metrics = client_metrics or ClientMetrics()
    return HeuristicVector(
        user_offer=offer_clarity(text),
        user_navigation=navigation_clarity(html),
        user_action=action_clarity(html),
        visual_consistency=_metric(metrics.visual_consistency),
        visual_tone=_metric(metrics.visual_tone),
        visual_environment=_metric(metrics.visual_environment),
        story_purpose=story_purpose(text),
        story_emotion=_metric(metrics.story_emotion),
        story_identity=_metric(metrics.story_identity),
    )
