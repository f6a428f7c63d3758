"""
Recommended next actions per type.

Shown once the loop finishes; ``build_assertive_reco`` adds a headline
whose certainty follows the posterior confidence.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..core.model import TYPE_LABELS


NEXT_STEPS: Dict[str, List[str]] = {
    "TYPE_STRATEGY": [
        "Summarize the stakeholders' success criteria on a single page and align on it",
        "Lay out three options (A/B/C) in a comparison table before deciding",
        "Order the next meeting agenda as goal, decision criteria, then open issues",
    ],
    "TYPE_EMPATHY": [
        "Write down three guesses about the other person's hopes and worries, then check them",
        "Run the next 1:1 through past, present and future perspectives",
        "Map the people involved by influence and interest",
    ],
    "TYPE_EXECUTION": [
        "Block this week's tasks in 15-minute slots and review them each morning",
        "Share a minimal output within 30 minutes of starting",
        "List external dependencies that are blocking you and clear them one by one",
    ],
    "TYPE_ANALYTICAL": [
        "Keep notes that separate facts, interpretations and decisions",
        "Identify the three places where data or evidence is missing",
        "Narrow to a single hypothesis and write down how you will test it",
    ],
    "TYPE_STABILITY": [
        "Document the boundaries of roles, responsibilities and decision rights",
        "Template the purpose and expected output of recurring meetings",
        "Brief the people involved before any change lands",
    ],
}

_HEADLINES: Dict[str, str] = {
    "TYPE_STRATEGY": "Set the priorities yourself first.",
    "TYPE_EMPATHY": "Start by mapping how the people around you are doing.",
    "TYPE_EXECUTION": "Cut the work small and move today.",
    "TYPE_ANALYTICAL": "Fix a provisional decision rule, then test it.",
    "TYPE_STABILITY": "Settle on a repeatable routine before anything else.",
}

_BULLETS: Dict[str, List[str]] = {
    "TYPE_STRATEGY": [
        "Open each meeting by stating what must be decided in the next 30 minutes",
        "Present only three options and push for a quick decision",
        "Set and take the smallest step on the shortest route first thing tomorrow",
    ],
    "TYPE_EMPATHY": [
        "Start 1:1s with 'how are you doing, out of 10?'",
        "Move past empathy to 'so what shall we change together?'",
        "Record the next step in the other person's own words",
    ],
    "TYPE_EXECUTION": [
        "Split the goal into 30-minute tasks and assign them on the spot",
        "Book the time in your calendar and report when it is done",
        "Define done clearly so nothing is left ambiguous",
    ],
    "TYPE_ANALYTICAL": [
        "Put KPIs, constraints and risks on one page",
        "Define the two branches that would change your next move and gather that data",
        "Agree with stakeholders on where the evidence comes from",
    ],
    "TYPE_STABILITY": [
        "Fix a weekly rhythm: 1:1, retrospective, next step",
        "Batch changes monthly and keep daily rules steady",
        "Turn single-person know-how into written procedures",
    ],
}

_DEFAULT_BULLETS = [
    "Write one sentence describing what 'done' looks like at the end of this week",
    "Split it into 30-minute tasks and start the first one now",
    "Check next week, on facts, what was and was not done",
]


def next_steps_for_type(type_key: str) -> List[str]:
    """Recommended next actions for a type (stability advice as the default)."""
    return list(NEXT_STEPS.get(type_key, NEXT_STEPS["TYPE_STABILITY"]))


def _confidence_prefix(confidence: Optional[float]) -> str:
    if confidence is None:
        return "You are"
    if confidence >= 0.9:
        return "You are without doubt"
    if confidence >= 0.8:
        return "You are very likely"
    if confidence >= 0.7:
        return "You are probably"
    return "You are"


def build_assertive_reco(
    top: str,
    strengths: Optional[Sequence[str]] = None,
    confidence: Optional[float] = None,
) -> Dict[str, object]:
    """
    Headline plus three bullets for the inferred type.

    Up to two of the user's strengths are tagged onto the first bullet.
    """
    tag = ", ".join(list(strengths or [])[:2])

    def with_tag(text: str) -> str:
        return f"{text} (top: {tag})" if tag else text

    if top not in TYPE_LABELS:
        return {
            "headline": "Type still being inferred. Pick just one next step.",
            "bullets": [with_tag(_DEFAULT_BULLETS[0])] + _DEFAULT_BULLETS[1:],
        }

    label = TYPE_LABELS[top]
    article = "an" if label[0] in "AEIOU" else "a"
    bullets = _BULLETS[top]
    return {
        "headline": f"{_confidence_prefix(confidence)} {article} {label}. {_HEADLINES[top]}",
        "bullets": [with_tag(bullets[0])] + bullets[1:],
    }
