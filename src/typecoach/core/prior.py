"""
Prior construction from context and trait tags.

    prior(t) ∝ 1 + context_bonus(t) + 0.35 * #{traits mapping to t}

Bonuses are small so the prior never outweighs a few answers. Trait
bonuses accumulate without a cap when several traits share a type.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Mapping, Optional, Sequence

import numpy as np

from .model import TYPES
from .utils import normalize

logger = logging.getLogger(__name__)


CONTEXT_BONUSES: Dict[str, Dict[str, float]] = {
    "work": {"TYPE_STRATEGY": 0.4, "TYPE_EXECUTION": 0.3},
    "relationships": {"TYPE_EMPATHY": 0.5, "TYPE_STABILITY": 0.2},
    "private": {"TYPE_STABILITY": 0.5},
}

TRAIT_BONUS = 0.35

_TYPE_INDEX = {t: i for i, t in enumerate(TYPES)}


def build_prior(
    context: Optional[str] = None,
    trait_tags: Optional[Sequence[str]] = None,
    trait_to_type: Optional[Mapping[str, str]] = None,
) -> np.ndarray:
    """
    Build a normalized prior over TYPES.

    Args:
        context: Context category ("work", "relationships", "private") or None
        trait_tags: The user's trait tags (e.g. top strength themes)
        trait_to_type: Injected trait -> type table

    Returns:
        prior: [N_TYPES] distribution
    """
    base = np.ones(len(TYPES), dtype=np.float64)

    if context:
        bonuses = CONTEXT_BONUSES.get(context)
        if bonuses is None:
            logger.debug(f"Unknown context category {context!r}, no bonus applied")
        else:
            for type_key, bonus in bonuses.items():
                base[_TYPE_INDEX[type_key]] += bonus

    if trait_tags and trait_to_type:
        for tag in trait_tags:
            type_key = trait_to_type.get(tag)
            if type_key in _TYPE_INDEX:
                base[_TYPE_INDEX[type_key]] += TRAIT_BONUS
            else:
                logger.debug(f"Trait {tag!r} has no type mapping")

    return normalize(base)


def apply_demographic_bias(
    prior: np.ndarray,
    demographics: Optional[Mapping[str, str]] = None,
) -> np.ndarray:
    """
    Nudge a prior with coarse demographic hints, then renormalize.

    Recognized keys: "gender" (any non-empty value), "age_range"
    (e.g. "20s", "40-49", "60+") and "hometown" (flagged when it
    mentions a regional/local area). Bumps are an order of magnitude
    below the context bonuses.
    """
    if not demographics:
        return prior

    biased = np.array(prior, dtype=np.float64)

    def bump(type_key: str, v: float) -> None:
        biased[_TYPE_INDEX[type_key]] += v

    if demographics.get("gender"):
        bump("TYPE_EMPATHY", 0.03)
        bump("TYPE_STABILITY", 0.02)

    age = demographics.get("age_range")
    if age:
        if re.search(r"10|20", age):
            bump("TYPE_STRATEGY", 0.04)
            bump("TYPE_EXECUTION", 0.03)
        elif re.search(r"40|50|60|\+", age):
            bump("TYPE_STABILITY", 0.04)
            bump("TYPE_ANALYTICAL", 0.02)
        else:
            bump("TYPE_ANALYTICAL", 0.02)

    hometown = demographics.get("hometown")
    if hometown and re.search(r"regional|local|rural", hometown, re.IGNORECASE):
        bump("TYPE_STABILITY", 0.03)

    return normalize(biased)
