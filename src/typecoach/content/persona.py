"""
Strength profile built from a user's top themes.

Each theme contributes short trait and management notes; notes shared by
several themes are ranked first in the summary.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence


@dataclass(frozen=True)
class PersonaEntry:
    traits: List[str]
    management: List[str]


_SHORT_SPRINTS = "Run work in short sprints"
_CLEAR_GOALS = "Agree on clear goals up front"
_ONE_ON_ONE = "Hold regular 1:1s"
_TIME_TO_THINK = "Leave time to think before deciding"
_AUTONOMY = "Give room for their own judgement"
_DATA = "Share data and sources"

STRENGTH_PERSONA: Dict[str, PersonaEntry] = {
    "Achiever": PersonaEntry(["Finishes a lot every day"], [_CLEAR_GOALS, "Make progress visible"]),
    "Activator": PersonaEntry(["Starts new things quickly", "Wants to keep moving"], [_SHORT_SPRINTS, "Assign kick-off roles"]),
    "Adaptability": PersonaEntry(["Responds well to change"], ["Assign changing, reactive work"]),
    "Analytical": PersonaEntry(["Looks for causes and evidence"], [_DATA, _TIME_TO_THINK]),
    "Arranger": PersonaEntry(["Juggles many moving parts"], ["Let them organize resources", _AUTONOMY]),
    "Belief": PersonaEntry(["Driven by stable values"], ["Connect the work to its purpose"]),
    "Command": PersonaEntry(["Takes charge and moves the room"], [_AUTONOMY, "Define authority clearly"]),
    "Communication": PersonaEntry(["Puts ideas into words easily"], ["Put them in front of an audience", "Add a review step for statements"]),
    "Competition": PersonaEntry(["Measures themselves against others"], ["Make the scoreboard explicit", _CLEAR_GOALS]),
    "Connectedness": PersonaEntry(["Sees links between people and events"], ["Connect the work to its purpose"]),
    "Consistency": PersonaEntry(["Values fair, equal treatment"], ["Make rules and criteria explicit"]),
    "Context": PersonaEntry(["Understands the present through the past"], ["Explain the background first", _TIME_TO_THINK]),
    "Deliberative": PersonaEntry(["Anticipates risk carefully"], [_TIME_TO_THINK, _DATA]),
    "Developer": PersonaEntry(["Notices growth in others"], ["Give them people to mentor", _ONE_ON_ONE]),
    "Discipline": PersonaEntry(["Keeps routines and order"], [_CLEAR_GOALS, "Avoid sudden changes"]),
    "Empathy": PersonaEntry(["Senses how others feel"], [_ONE_ON_ONE, "Recognize their emotional labour"]),
    "Focus": PersonaEntry(["Stays on the goal"], [_CLEAR_GOALS, "Protect them from interruptions"]),
    "Futuristic": PersonaEntry(["Inspired by what could be"], ["Ask for their long-range view", _AUTONOMY]),
    "Harmony": PersonaEntry(["Seeks agreement and avoids conflict"], ["Use them to build consensus", _ONE_ON_ONE]),
    "Ideation": PersonaEntry(["Finds new angles"], ["Invite them to brainstorms", _AUTONOMY]),
    "Includer": PersonaEntry(["Brings outsiders into the group"], ["Give them onboarding roles"]),
    "Individualization": PersonaEntry(["Sees what is unique in each person"], ["Let them tailor roles", _ONE_ON_ONE]),
    "Input": PersonaEntry(["Collects information and ideas"], [_DATA, "Give them research tasks"]),
    "Intellection": PersonaEntry(["Enjoys thinking deeply"], [_TIME_TO_THINK, "Ask for their reflections"]),
    "Learner": PersonaEntry(["Loves the process of learning"], ["Give them new subjects to learn", _DATA]),
    "Maximizer": PersonaEntry(["Turns good into excellent"], [_CLEAR_GOALS, "Agree on the bar for done"]),
    "Positivity": PersonaEntry(["Lifts the mood of the room"], ["Put them where morale matters"]),
    "Relator": PersonaEntry(["Builds deep, trusted relationships"], [_ONE_ON_ONE, "Keep teams stable"]),
    "Responsibility": PersonaEntry(["Owns what they commit to"], [_CLEAR_GOALS, "Avoid overloading them"]),
    "Restorative": PersonaEntry(["Likes finding and fixing problems"], ["Hand them broken processes"]),
    "Self-Assurance": PersonaEntry(["Trusts their own judgement"], [_AUTONOMY, "Align on purpose, then step back"]),
    "Significance": PersonaEntry(["Wants to make a visible impact"], ["Recognize their contributions", _CLEAR_GOALS]),
    "Strategic": PersonaEntry(["Spots the best route quickly"], ["Ask for options early", _AUTONOMY]),
    "Woo": PersonaEntry(["Wins people over easily"], ["Put them on first contact"]),
}


@dataclass
class StrengthProfile:
    per_theme: List[Dict[str, object]] = field(default_factory=list)
    summarized_traits: List[str] = field(default_factory=list)
    summarized_management: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "per_theme": self.per_theme,
            "summarized_traits": self.summarized_traits,
            "summarized_management": self.summarized_management,
        }


def _pick_top(items: List[str], n: int) -> List[str]:
    freq = Counter(items)
    ranked = sorted(freq.items(), key=lambda kv: (-kv[1], kv[0]))
    return [s for s, _ in ranked[:n]]


def build_strength_profile(top_themes: Sequence[str], top_n: int = 5) -> StrengthProfile:
    """Per-theme cards for known themes plus frequency-ranked summaries."""
    per_theme = [
        {
            "theme": t,
            "traits": list(STRENGTH_PERSONA[t].traits),
            "management": list(STRENGTH_PERSONA[t].management),
        }
        for t in top_themes
        if t in STRENGTH_PERSONA
    ]
    all_traits = [s for entry in per_theme for s in entry["traits"]]
    all_mgmt = [s for entry in per_theme for s in entry["management"]]
    n = min(top_n, 8)
    return StrengthProfile(
        per_theme=per_theme,
        summarized_traits=_pick_top(all_traits, n),
        summarized_management=_pick_top(all_mgmt, n),
    )
