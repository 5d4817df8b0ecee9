from clarity_backend.schemas import ClarityScores
from clarity_backend.services.ai_service import AIEvaluation
from clarity_backend.services.heuristics import build_heuristics
from clarity_backend.services.report import (
    build_report,
    lens_means,
    make_quick_wins,
    merge_scores,
    normalize_reasons,
    weakest_lenses,
)


def scores_with_means(user, visual, story):
    return ClarityScores(
        user={"offer": user, "navigation": user, "action": user},
        visual={"consistency": visual, "tone": visual, "environment": visual},
        story={"purpose": story, "emotion": story, "identity": story},
    )


def test_merge_without_llm_maps_heuristics():
    scores = merge_scores(build_heuristics("", "", None), None)

    assert scores.user.offer == 3
    assert scores.user.navigation == 3
    assert scores.user.action == 2
    assert scores.visual.tone == 3
    assert scores.story.purpose == 3


def test_llm_scores_override_per_sub_dimension():
    evaluation = AIEvaluation(scores={
        "user": {"offer": 5, "navigation": None, "action": 1},
        "story": {"identity": 4},
    })
    scores = merge_scores(build_heuristics("", "", None), evaluation)

    assert scores.user.offer == 5
    assert scores.user.navigation == 3
    assert scores.user.action == 1
    assert scores.visual.consistency == 3
    assert scores.story.identity == 4
    assert scores.story.purpose == 3


def test_normalize_reasons_fills_missing_with_empty_strings():
    reasons = normalize_reasons(None)
    assert reasons.model_dump() == {
        "user": {"offer": "", "navigation": "", "action": ""},
        "visual": {"consistency": "", "tone": "", "environment": ""},
        "story": {"purpose": "", "emotion": "", "identity": ""},
    }


def test_normalize_reasons_truncates_and_drops_non_strings():
    raw = {
        "user": {"offer": "x" * 500, "navigation": 42, "action": None},
        "visual": "not a block",
        "story": {"purpose": "Clear why."},
    }
    reasons = normalize_reasons(raw)

    assert reasons.user.offer == "x" * 220
    assert reasons.user.navigation == ""
    assert reasons.user.action == ""
    assert reasons.visual.tone == ""
    assert reasons.story.purpose == "Clear why."
    assert reasons.story.emotion == ""


def test_lens_means():
    means = lens_means(scores_with_means(2, 4, 3))
    assert means == {"user": 2.0, "visual": 4.0, "story": 3.0}


def test_quick_wins_target_two_weakest_lenses():
    wins = make_quick_wins(scores_with_means(2, 4, 3), "the homepage")

    assert len(wins) == 2
    assert wins[0].title == "Clarify next steps on the homepage"
    assert wins[1].title == "State the value in plain words on the homepage"


def test_quick_win_ties_keep_lens_order():
    assert weakest_lenses(scores_with_means(3, 3, 3)) == ["user", "visual"]
    assert weakest_lenses(scores_with_means(4, 2, 2)) == ["visual", "story"]


def test_quick_wins_default_scope():
    wins = make_quick_wins(scores_with_means(5, 1, 1), "")
    assert wins[0].title == "Tighten visual consistency on this page"
    assert wins[0].tip.startswith("Limit colors")


def test_build_report_without_llm_has_empty_reasons():
    report = build_report(build_heuristics("", "", None), None, "")
    body = report.model_dump(by_alias=True)

    assert set(body) == {"scores", "reasons", "quickWins"}
    assert all(v == "" for lens in body["reasons"].values() for v in lens.values())
    assert [w["title"] for w in body["quickWins"]] == [
        "Clarify next steps on this page",
        "Tighten visual consistency on this page",
    ]


def test_build_report_uses_llm_reasons():
    evaluation = AIEvaluation(
        scores={"user": {"offer": 4}},
        reasons={"user": {"offer": "Headline is plain."}},
    )
    report = build_report(build_heuristics("", "", None), evaluation, "Home")

    assert report.scores.user.offer == 4
    assert report.reasons.user.offer == "Headline is plain."
    assert report.reasons.visual.tone == ""
