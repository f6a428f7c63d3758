"""
Posterior updates and information-gain question selection.

Posterior: sequential Bayes over the full answer history,

    q(t) ∝ q_prev(t) * L(answer | yes_affinity[t])

with the entropy drop of each step recorded as that answer's evidence.

Selection: for each unanswered question,

    IG(q) = H[p] - sum_a P(a) * H[p(. | a)]

and the largest gain wins, ties broken by the smallest question id.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np

from .model import ANSWER_LEVELS, LIKELIHOOD_EPS, likelihood_vector
from .utils import normalize, entropy, clamp

logger = logging.getLogger(__name__)

# Gains closer than this are treated as tied
TIE_EPS = 1e-9

# Used for a marginal P(a) that came out non-finite
FALLBACK_ANSWER_PROB = 0.2


def bayes_step(belief: np.ndarray, question, answer: str) -> np.ndarray:
    """
    One Bayesian update for a single (question, answer) pair.

    Args:
        belief: Current belief over types [n_types]
        question: Object exposing ``yes_vector`` aligned with TYPES
        answer: One of ANSWER_LEVELS

    Returns:
        posterior: Updated, normalized belief [n_types]
    """
    return normalize(belief * likelihood_vector(answer, question.yes_vector))


def update_posterior(
    prior: np.ndarray,
    answered: Iterable[Tuple[object, str]],
) -> Tuple[np.ndarray, List[float]]:
    """
    Recompute the posterior from the prior over the full answer history.

    Must be given the whole history in order: each delta depends on the
    belief left by the answers before it. Undo is just a shorter replay.

    Args:
        prior: Prior belief over types [n_types]
        answered: Sequence of (question, answer) pairs, oldest first

    Returns:
        (posterior, deltas) where deltas[i] = max(0, H_before - H_after)
        for the i-th pair
    """
    belief = normalize(np.array(prior, dtype=np.float64))
    deltas: List[float] = []
    for question, answer in answered:
        h_before = entropy(belief)
        belief = bayes_step(belief, question, answer)
        h_after = entropy(belief)
        deltas.append(max(0.0, h_before - h_after))
    return belief, deltas


def answer_marginals(belief: np.ndarray, question) -> np.ndarray:
    """
    Predictive distribution over the five answer levels.

    P(a) = sum_t belief(t) * L(a | yes[t]), each clamped into (eps, 1 - eps),
    then renormalized across levels. The per-type likelihoods of paired
    levels (YES/NO, PROB_YES/PROB_NO) sum to one and UNKNOWN is 0.5, so the
    renormalizing constant is the same for every type and the result is an
    exact marginal of a proper joint.
    """
    pa = np.zeros(len(ANSWER_LEVELS), dtype=np.float64)
    for i, a in enumerate(ANSWER_LEVELS):
        s = float(np.dot(belief, likelihood_vector(a, question.yes_vector)))
        if np.isfinite(s):
            pa[i] = clamp(s, LIKELIHOOD_EPS, 1.0 - LIKELIHOOD_EPS)
        else:
            pa[i] = FALLBACK_ANSWER_PROB
    return normalize(pa)


def expected_posterior_entropy(belief: np.ndarray, question) -> float:
    """E_a[ H(p(. | a)) ] under the predictive answer distribution."""
    pa = answer_marginals(belief, question)
    exp_h = 0.0
    for i, a in enumerate(ANSWER_LEVELS):
        unnorm = belief * likelihood_vector(a, question.yes_vector)
        unnorm = np.where(np.isfinite(unnorm), unnorm, 0.0)
        exp_h += pa[i] * entropy(normalize(unnorm))
    return exp_h


def compute_information_gain(belief: np.ndarray, question) -> float:
    """
    Expected entropy reduction (bits) from asking ``question`` next.

    Higher IG means the answer is expected to separate the types more.
    """
    belief = normalize(belief)
    return entropy(belief) - expected_posterior_entropy(belief, question)


def pick_next_question(
    posterior: np.ndarray,
    questions: Sequence,
    answered_ids: Set[str],
) -> Tuple[Optional[object], float]:
    """
    Pick the unanswered question with the highest expected information gain.

    Candidates are scanned in ascending id order and a later candidate
    only wins by more than TIE_EPS, so near-ties go to the smallest id.

    Args:
        posterior: Current belief over types (read only)
        questions: The question bank
        answered_ids: IDs already answered in this session

    Returns:
        (question, expected_gain); (None, 0.0) when nothing is left.
        If no candidate has a positive, finite gain the smallest
        unanswered id is returned with gain 0.

    The reported gain is the mutual information between type and answer
    under the renormalized answer marginals (see ``answer_marginals``),
    so it lies in [0, H[posterior]]. Plugging the unnormalized P(a) into
    the IG formula ranks questions the same way but can go negative.
    """
    belief = normalize(np.array(posterior, dtype=np.float64))

    candidates = sorted(
        (q for q in questions if q.id not in answered_ids),
        key=lambda q: q.id,
    )
    if not candidates:
        return None, 0.0

    best = None
    best_gain = 0.0
    for q in candidates:
        gain = compute_information_gain(belief, q)
        if not np.isfinite(gain):
            continue
        if gain > best_gain + TIE_EPS:
            best = q
            best_gain = gain

    if best is None:
        logger.debug(
            f"No positive information gain among {len(candidates)} candidates, "
            f"falling back to {candidates[0].id}"
        )
        return candidates[0], 0.0

    return best, float(best_gain)

