"""
The nine clarity questions per vertical, in score order:
user (offer, navigation, action), visual (consistency, tone, environment),
story (purpose, emotion, identity).

Kept in sync with the UI wording so the model scores what the user reads.
"""

from __future__ import annotations

from typing import List, Tuple

DEFAULT_CONTEXT = "consultancy"
DEFAULT_SCOPE = "this page"

_QUESTIONS = {
    "consultancy": (
        "How instantly can someone tell what your company offers when they land on {scope}?",
        "How easy is it for a potential client to find relevant information or services on {scope}?",
        "How clearly does {scope} guide a potential client toward contacting you or starting a project?",
        "How consistent does the design of {scope} feel, does everything look like it belongs together?",
        "How well does the visual style of {scope} communicate the level of quality and professionalism you deliver?",
        "How comfortable and confident does {scope} feel: calm and credible vs. cluttered or chaotic?",
        "How clearly does {scope} explain your value in plain, human language?",
        "How convincingly does {scope} show the results of your work, not just what you delivered?",
        "How much character and point of view comes through on {scope}, instead of a neutral corporate tone?",
    ),
    "saas": (
        "How quickly can a new user see what they can achieve on {scope}?",
        "How easy is it to spot the main action on {scope} without searching?",
        "How naturally do messages on {scope} read: human and clear vs. robotic or coded?",
        "How calm and focused does {scope} feel on first view?",
        "How consistent are icons, buttons, and patterns across {scope}?",
        "How credible does the visual tone of {scope} feel for your product's maturity?",
        "How quickly could a visitor explain in one sentence what {scope} does?",
        "How well does {scope} deliver on the promise from your marketing?",
        "How distinct does your product voice feel on {scope}?",
    ),
    "outdoor": (
        "How quickly can someone tell what kind of product or activity {scope} is about?",
        "How clearly do the visuals on {scope} show how the product is used in real life?",
        "How clearly does {scope} communicate why the product exists: the problem it solves or the benefit it gives?",
        "How well do the visuals on {scope} express the intended feeling: rugged, light, premium, or technical?",
        "How consistent are colors, typography, and imagery across {scope}?",
        "How naturally does {scope} express the place your brand belongs: on the mountain, in the city, or out on the trail?",
        "How clearly does {scope} express what your brand stands for, the bigger reason you exist beyond the products?",
        "How strongly does {scope} make people feel something, like inspiration, trust, or excitement, beyond recognition?",
        "How recognizable would your brand be if the logo were hidden on {scope}?",
    ),
}

SUPPORTED_CONTEXTS: Tuple[str, ...] = tuple(_QUESTIONS)


def resolve_context(context: str | None) -> str:
    """Unknown verticals fall back to consultancy."""
    return context if context in _QUESTIONS else DEFAULT_CONTEXT


def get_questions(context: str | None, scope_label: str | None = "") -> List[str]:
    scope = (scope_label or "").strip() or DEFAULT_SCOPE
    return [q.format(scope=scope) for q in _QUESTIONS[resolve_context(context)]]
