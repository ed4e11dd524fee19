"""
Fallback normalization for critique documents parsed out of a model reply.

The model output is untrusted: sections go missing, scores arrive as strings,
and landing scores come back as 0 even when landing content was supplied.
`normalize_critique` turns whatever was parsed into a CritiqueResult-shaped
document. Lists are capped at their contract lengths but short lists are not
padded. It also enforces the landing-score contract:

  - no landing content: every landing/mismatch score is left as the model
    produced it (the prompt asks for 0; there is no downward correction)
  - landing content:    every landing/mismatch score is an integer in 1..10

Running it over its own output changes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

NEUTRAL_SCORE = 5
MAX_SCORE = 10

ISSUE_LIMIT = 5
HEADLINE_LIMIT = 3
CTA_LIMIT = 2
EXPERIMENT_LIMIT = 3
NEXT_STEP_LIMIT = 4

LANDING_SCORE_FIELDS = (
    "overall_score",
    "headline_score",
    "value_prop_score",
    "cta_score",
    "trust_score",
)


@dataclass(frozen=True)
class ScoreRule:
    section: str
    field: str
    when_available: bool
    correct: Callable[[Mapping[str, Any]], int]


def _neutral(section: Mapping[str, Any]) -> int:
    return NEUTRAL_SCORE


def _from_headline(section: Mapping[str, Any]) -> int:
    return max(1, section.get("headline_score") or NEUTRAL_SCORE)


# Applied in order; a rule fires when availability matches `when_available`
# and the current value is below 1. The overall rule reads the headline score
# before the headline rule has corrected it.
SCORE_RULES: tuple[ScoreRule, ...] = (
    ScoreRule("landing_page_roast", "overall_score", True, _from_headline),
    ScoreRule("landing_page_roast", "headline_score", True, _neutral),
    ScoreRule("landing_page_roast", "value_prop_score", True, _neutral),
    ScoreRule("landing_page_roast", "cta_score", True, _neutral),
    ScoreRule("landing_page_roast", "trust_score", True, _neutral),
    ScoreRule("ad_landing_mismatch", "alignment_score", True, _neutral),
)


def default_landing_page_roast(available: bool) -> dict[str, Any]:
    score = NEUTRAL_SCORE if available else 0
    return {
        "overall_score": score,
        "headline_score": score,
        "headline_feedback": "Analysis could not be completed" if available else "No landing page provided",
        "value_prop_score": score,
        "value_prop_feedback": "",
        "cta_score": score,
        "cta_feedback": "",
        "trust_score": score,
        "trust_feedback": "",
        "top_issues": [],
        "quick_wins": [],
    }


def default_ad_landing_mismatch(available: bool) -> dict[str, Any]:
    return {
        "alignment_score": NEUTRAL_SCORE if available else 0,
        "verdict": "Analysis could not be completed" if available else "No landing page provided for comparison",
        "disconnects": [],
        "message_match_issues": "",
    }


def coerce_score(value: Any) -> int:
    """Integer in 0..10; anything non-numeric counts as 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or value != value:
        return 0
    return min(MAX_SCORE, max(0, int(round(value))))


def coerce_ad_score(value: Any) -> int:
    score = coerce_score(value)
    return score if score >= 1 else NEUTRAL_SCORE


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def coerce_text_list(value: Any, limit: int | None = None) -> list[str]:
    if not isinstance(value, list):
        return []
    items = [coerce_text(v) for v in value if v is not None]
    return items[:limit] if limit is not None else items


def _records(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, Mapping)]


def _landing_page_roast(raw: Any, available: bool) -> dict[str, Any]:
    if not raw or not isinstance(raw, Mapping):
        return default_landing_page_roast(available)
    return {
        "overall_score": coerce_score(raw.get("overall_score")),
        "headline_score": coerce_score(raw.get("headline_score")),
        "headline_feedback": coerce_text(raw.get("headline_feedback")),
        "value_prop_score": coerce_score(raw.get("value_prop_score")),
        "value_prop_feedback": coerce_text(raw.get("value_prop_feedback")),
        "cta_score": coerce_score(raw.get("cta_score")),
        "cta_feedback": coerce_text(raw.get("cta_feedback")),
        "trust_score": coerce_score(raw.get("trust_score")),
        "trust_feedback": coerce_text(raw.get("trust_feedback")),
        "top_issues": coerce_text_list(raw.get("top_issues")),
        "quick_wins": coerce_text_list(raw.get("quick_wins")),
    }


def _ad_landing_mismatch(raw: Any, available: bool) -> dict[str, Any]:
    if not raw or not isinstance(raw, Mapping):
        return default_ad_landing_mismatch(available)
    return {
        "alignment_score": coerce_score(raw.get("alignment_score")),
        "verdict": coerce_text(raw.get("verdict")),
        "disconnects": [
            {"problem": coerce_text(d.get("problem")), "fix": coerce_text(d.get("fix"))}
            for d in _records(raw.get("disconnects"))
        ],
        "message_match_issues": coerce_text(raw.get("message_match_issues")),
    }


def _fix_kit(raw: Any) -> dict[str, Any]:
    raw = raw if isinstance(raw, Mapping) else {}
    return {
        "headlines": coerce_text_list(raw.get("headlines"), HEADLINE_LIMIT),
        "body": coerce_text(raw.get("body")),
        "ctas": coerce_text_list(raw.get("ctas"), CTA_LIMIT),
        "landing_page_headline": coerce_text(raw.get("landing_page_headline")),
        "landing_page_subhead": coerce_text(raw.get("landing_page_subhead")),
        "rationale": coerce_text(raw.get("rationale")),
    }


def apply_score_rules(doc: dict[str, Any], available: bool) -> dict[str, Any]:
    for rule in SCORE_RULES:
        if rule.when_available != available:
            continue
        section = doc[rule.section]
        value = section.get(rule.field)
        if not value or value < 1:
            section[rule.field] = rule.correct(section)
    return doc


def normalize_critique(parsed: Mapping[str, Any], *, has_landing_content: bool) -> dict[str, Any]:
    """Build a complete critique document from a parsed model reply.

    `parsed` is not modified.
    """
    doc = {
        "icp_mismatch": coerce_text(parsed.get("icp_mismatch")),
        "overall_score": coerce_ad_score(parsed.get("overall_score")),
        "issues": [
            {
                "category": coerce_text(issue.get("category")),
                "title": coerce_text(issue.get("title")),
                "score": coerce_ad_score(issue.get("score")),
                "explanation": coerce_text(issue.get("explanation")),
            }
            for issue in _records(parsed.get("issues"))[:ISSUE_LIMIT]
        ],
        "landing_page_roast": _landing_page_roast(parsed.get("landing_page_roast"), has_landing_content),
        "ad_landing_mismatch": _ad_landing_mismatch(parsed.get("ad_landing_mismatch"), has_landing_content),
        "fix_kit": _fix_kit(parsed.get("fix_kit")),
        "experiments": [
            {"title": coerce_text(e.get("title")), "description": coerce_text(e.get("description"))}
            for e in _records(parsed.get("experiments"))[:EXPERIMENT_LIMIT]
        ],
        "next_steps": coerce_text_list(parsed.get("next_steps"), NEXT_STEP_LIMIT),
    }
    return apply_score_rules(doc, has_landing_content)
