"""
Type space and answer likelihood model.

Five latent types, five answer levels. ``likelihood`` is the single place
where the informativeness of one answer is calibrated.

    r = clamp(w * y + (1 - w) * (1 - y), eps, 1 - eps)
    s = r^gamma / (r^gamma + (1 - r)^gamma)
"""

from __future__ import annotations

from typing import Dict, List

import numpy as np

from .errors import InvalidAnswerError
from .utils import clamp


# =============================================================================
# TYPE SPACE
# =============================================================================

TYPES: List[str] = [
    "TYPE_STRATEGY",
    "TYPE_EMPATHY",
    "TYPE_EXECUTION",
    "TYPE_ANALYTICAL",
    "TYPE_STABILITY",
]

N_TYPES = len(TYPES)

TYPE_LABELS: Dict[str, str] = {
    "TYPE_STRATEGY": "Strategy Driver",
    "TYPE_EMPATHY": "Empathy Moderator",
    "TYPE_EXECUTION": "Execution Organizer",
    "TYPE_ANALYTICAL": "Analytical Explorer",
    "TYPE_STABILITY": "Stability Keeper",
}


# =============================================================================
# ANSWER LEVELS
# =============================================================================

ANSWER_LEVELS: List[str] = ["YES", "PROB_YES", "UNKNOWN", "PROB_NO", "NO"]

# Credence given to a "yes" reading of each level (independent of the question)
ANSWER_WEIGHT: Dict[str, float] = {
    "YES": 1.0,
    "PROB_YES": 0.75,
    "UNKNOWN": 0.5,
    "PROB_NO": 0.25,
    "NO": 0.0,
}

SHARPEN = 1.6
LIKELIHOOD_EPS = 1e-6


def validate_answer(answer: str) -> str:
    """Return ``answer`` unchanged, or raise InvalidAnswerError."""
    if not isinstance(answer, str) or answer not in ANSWER_WEIGHT:
        raise InvalidAnswerError(answer)
    return answer


def likelihood(answer: str, yes_prob: float) -> float:
    """
    Probability of observing ``answer`` from a respondent whose
    yes-affinity for the question is ``yes_prob``.

    Args:
        answer: One of ANSWER_LEVELS
        yes_prob: P("strong yes" | type), in (0, 1)

    Returns:
        Likelihood strictly inside (0, 1)
    """
    w = ANSWER_WEIGHT[validate_answer(answer)]
    r = clamp(w * yes_prob + (1.0 - w) * (1.0 - yes_prob),
              LIKELIHOOD_EPS, 1.0 - LIKELIHOOD_EPS)

    # Sharpen: push r away from 0.5
    p = r ** SHARPEN
    q = (1.0 - r) ** SHARPEN
    s = p / (p + q)
    return clamp(s, LIKELIHOOD_EPS, 1.0 - LIKELIHOOD_EPS)


def likelihood_vector(answer: str, yes_probs: np.ndarray) -> np.ndarray:
    """Vectorized ``likelihood`` over an array of per-type affinities."""
    w = ANSWER_WEIGHT[validate_answer(answer)]
    r = np.clip(w * yes_probs + (1.0 - w) * (1.0 - yes_probs),
                LIKELIHOOD_EPS, 1.0 - LIKELIHOOD_EPS)
    p = r ** SHARPEN
    q = (1.0 - r) ** SHARPEN
    return np.clip(p / (p + q), LIKELIHOOD_EPS, 1.0 - LIKELIHOOD_EPS)


def type_label(type_key: str) -> str:
    """Human-readable label for a type key."""
    return TYPE_LABELS.get(type_key, type_key)
