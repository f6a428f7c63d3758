"""
The 34 strength themes and their mapping onto the five types.

STRENGTH_TO_TYPE is the default trait -> type table handed to the prior
builder. Themes without an entry (Developer, Significance) carry no bonus.
"""

from __future__ import annotations

from typing import Dict, List


STRENGTH_THEMES: List[str] = [
    "Achiever", "Activator", "Adaptability", "Analytical", "Arranger",
    "Belief", "Command", "Communication", "Competition", "Connectedness",
    "Consistency", "Context", "Deliberative", "Developer", "Discipline",
    "Empathy", "Focus", "Futuristic", "Harmony", "Ideation",
    "Includer", "Individualization", "Input", "Intellection", "Learner",
    "Maximizer", "Positivity", "Relator", "Responsibility", "Restorative",
    "Self-Assurance", "Significance", "Strategic", "Woo",
]

STRENGTH_TO_TYPE: Dict[str, str] = {
    # Strategy
    "Strategic": "TYPE_STRATEGY",
    "Ideation": "TYPE_STRATEGY",
    "Futuristic": "TYPE_STRATEGY",
    "Self-Assurance": "TYPE_STRATEGY",
    "Command": "TYPE_STRATEGY",
    "Maximizer": "TYPE_STRATEGY",
    "Competition": "TYPE_STRATEGY",
    # Empathy
    "Empathy": "TYPE_EMPATHY",
    "Includer": "TYPE_EMPATHY",
    "Individualization": "TYPE_EMPATHY",
    "Harmony": "TYPE_EMPATHY",
    "Communication": "TYPE_EMPATHY",
    "Relator": "TYPE_EMPATHY",
    "Woo": "TYPE_EMPATHY",
    # Execution
    "Achiever": "TYPE_EXECUTION",
    "Discipline": "TYPE_EXECUTION",
    "Responsibility": "TYPE_EXECUTION",
    "Focus": "TYPE_EXECUTION",
    "Activator": "TYPE_EXECUTION",
    "Arranger": "TYPE_EXECUTION",
    "Restorative": "TYPE_EXECUTION",
    # Analytical
    "Analytical": "TYPE_ANALYTICAL",
    "Learner": "TYPE_ANALYTICAL",
    "Input": "TYPE_ANALYTICAL",
    "Intellection": "TYPE_ANALYTICAL",
    "Context": "TYPE_ANALYTICAL",
    "Deliberative": "TYPE_ANALYTICAL",
    # Stability
    "Adaptability": "TYPE_STABILITY",
    "Consistency": "TYPE_STABILITY",
    "Positivity": "TYPE_STABILITY",
    "Belief": "TYPE_STABILITY",
    "Connectedness": "TYPE_STABILITY",
}


def is_known_theme(theme: str) -> bool:
    """Check whether ``theme`` is one of the 34 strength themes."""
    return theme in STRENGTH_THEMES
