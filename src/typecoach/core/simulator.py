"""
Monte Carlo calibration harness for the question loop.

Draws synthetic respondents with a known true type, lets the engine
question them until the stopping policy fires, and reports how many
questions were needed, how confident the engine ended up and how often
it was right.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .inference import bayes_step, pick_next_question
from .model import TYPES
from .prior import build_prior
from .utils import argmax_index, entropy
from ..content.question_bank import DEFAULT_BANK, QuestionBank
from ..content.strengths import STRENGTH_TO_TYPE

logger = logging.getLogger(__name__)


@dataclass
class SimConfig:
    """Parameters for one simulation run."""
    n_users: int = 1000
    threshold: float = 0.9
    max_questions: int = 8
    min_questions: int = 0
    noise: float = 0.05            # Answer noise in [0, 0.5]
    context: Optional[str] = None
    traits: Optional[List[str]] = None
    seed: int = 42


@dataclass
class SimulationStats:
    """Aggregate KPIs over all simulated respondents."""
    avg_questions: float
    avg_confidence: float
    stop_by_threshold: float
    stop_by_max: float
    type_hit_rate: float
    # [{"id", "text", "avg_ig"}], sorted by avg_ig descending
    ig_per_question: List[Dict[str, object]] = field(default_factory=list)
    # confusion[true][predicted] counts
    confusion: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "avg_questions": self.avg_questions,
            "avg_confidence": self.avg_confidence,
            "stop_by_threshold": self.stop_by_threshold,
            "stop_by_max": self.stop_by_max,
            "type_hit_rate": self.type_hit_rate,
            "ig_per_question": self.ig_per_question,
            "confusion": self.confusion,
        }


def sample_answer(yes_prob: float, noise: float, rng: np.random.Generator) -> str:
    """
    Draw an answer for a respondent with the given yes-affinity.

    A yes/no is drawn from ``yes_prob``, pulled toward the middle by
    ``noise``, then mapped onto the five levels by cut points.
    """
    base_yes = rng.random() < yes_prob
    p = 0.9 - noise if base_yes else 0.1 + noise
    if p >= 0.8:
        return "YES"
    if p >= 0.6:
        return "PROB_YES"
    if p >= 0.4:
        return "UNKNOWN"
    if p >= 0.2:
        return "PROB_NO"
    return "NO"


def run_simulation(
    config: SimConfig,
    bank: QuestionBank = DEFAULT_BANK,
    trait_to_type: Optional[Dict[str, str]] = None,
) -> SimulationStats:
    """
    Simulate ``config.n_users`` respondents against ``bank``.

    True types are drawn uniformly. Questions are picked exactly as a live
    session would pick them; the stopping rule additionally requires at
    least one answer.
    """
    if config.n_users <= 0:
        raise ValueError("n_users must be positive")

    rng = np.random.default_rng(config.seed)
    prior = build_prior(
        config.context,
        config.traits,
        STRENGTH_TO_TYPE if trait_to_type is None else trait_to_type,
    )
    n_types = len(TYPES)
    min_questions = max(1, config.min_questions)

    ig_sum = {q.id: 0.0 for q in bank}
    ig_cnt = {q.id: 0 for q in bank}
    confusion = np.zeros((n_types, n_types), dtype=np.int64)

    total_q = 0
    total_conf = 0.0
    by_threshold = 0
    by_max = 0
    hits = 0

    for _ in range(config.n_users):
        true_idx = int(rng.integers(n_types))
        belief = prior.copy()
        answered: set = set()

        while True:
            question, _gain = pick_next_question(belief, bank, answered)
            if question is None:
                break
            answer = sample_answer(float(question.yes_vector[true_idx]), config.noise, rng)
            answered.add(question.id)

            h_before = entropy(belief)
            belief = bayes_step(belief, question, answer)
            ig_sum[question.id] += max(0.0, h_before - entropy(belief))
            ig_cnt[question.id] += 1

            asked = len(answered)
            conf = float(belief[argmax_index(belief)])
            if asked >= min_questions and (
                conf >= config.threshold or asked >= config.max_questions
            ):
                break

        top_idx = argmax_index(belief)
        conf = float(belief[top_idx])
        total_q += len(answered)
        total_conf += conf
        if conf >= config.threshold:
            by_threshold += 1
        else:
            by_max += 1
        confusion[true_idx, top_idx] += 1
        if top_idx == true_idx:
            hits += 1

    n = config.n_users
    ig_per_question = sorted(
        (
            {
                "id": q.id,
                "text": q.text,
                "avg_ig": ig_sum[q.id] / ig_cnt[q.id] if ig_cnt[q.id] else 0.0,
            }
            for q in bank
        ),
        key=lambda row: row["avg_ig"],
        reverse=True,
    )

    stats = SimulationStats(
        avg_questions=total_q / n,
        avg_confidence=total_conf / n,
        stop_by_threshold=by_threshold / n,
        stop_by_max=by_max / n,
        type_hit_rate=hits / n,
        ig_per_question=ig_per_question,
        confusion={
            TYPES[i]: {TYPES[j]: int(confusion[i, j]) for j in range(n_types)}
            for i in range(n_types)
        },
    )
    logger.info(
        f"[Simulator] {n} users: avg_questions={stats.avg_questions:.2f}, "
        f"avg_confidence={stats.avg_confidence:.3f}, hit_rate={stats.type_hit_rate:.2f}"
    )
    return stats
