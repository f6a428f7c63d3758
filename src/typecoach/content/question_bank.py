"""
Question bank for the type classifier.

12 yes/no-style questions. Each carries a yes-affinity per type:
P("strong yes" | type), independent across types (not a distribution).
Affinities stay in a moderate band so that no single answer dominates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List

import numpy as np

from ..core.errors import UnknownQuestionError
from ..core.model import TYPES


@dataclass(frozen=True)
class TypeQuestion:
    """A question with per-type yes-affinities."""
    id: str
    text: str
    yes: Dict[str, float]
    # Affinities aligned with TYPES, filled in __post_init__
    yes_vector: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        missing = [t for t in TYPES if t not in self.yes]
        if missing:
            raise ValueError(f"Question {self.id} is missing affinities for {missing}")
        vec = np.array([float(self.yes[t]) for t in TYPES], dtype=np.float64)
        if not np.all((vec > 0.0) & (vec < 1.0)):
            raise ValueError(f"Question {self.id} has yes-affinities outside (0, 1)")
        vec.setflags(write=False)
        object.__setattr__(self, "yes_vector", vec)

    def to_dict(self) -> Dict:
        return {"id": self.id, "text": self.text}


class QuestionBank:
    """
    Immutable, id-indexed collection of questions.

    Built once and shared read-only across sessions; tests construct
    their own synthetic banks.
    """

    def __init__(self, questions: Iterable[TypeQuestion]):
        self._questions: tuple = tuple(questions)
        if not self._questions:
            raise ValueError("A question bank needs at least one question")
        self._by_id: Dict[str, TypeQuestion] = {}
        for q in self._questions:
            if q.id in self._by_id:
                raise ValueError(f"Duplicate question id: {q.id}")
            self._by_id[q.id] = q

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[TypeQuestion]:
        return iter(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    def get(self, question_id: str) -> TypeQuestion:
        """Look up a question by ID, raising UnknownQuestionError if absent."""
        try:
            return self._by_id[question_id]
        except KeyError:
            raise UnknownQuestionError(question_id) from None


def _q(qid: str, text: str, strategy: float, empathy: float, execution: float,
       analytical: float, stability: float) -> TypeQuestion:
    return TypeQuestion(
        id=qid,
        text=text,
        yes=dict(zip(TYPES, (strategy, empathy, execution, analytical, stability))),
    )


#                       strategy empathy execution analytical stability
DEFAULT_QUESTIONS: List[TypeQuestion] = [
    _q("Q1", "When a project starts, do you sketch several possible routes before committing to one?",
       0.75, 0.35, 0.45, 0.55, 0.35),
    _q("Q2", "Do you notice quickly when someone in a meeting is uncomfortable?",
       0.35, 0.75, 0.35, 0.40, 0.50),
    _q("Q3", "Do you break a new goal into concrete tasks on the same day you get it?",
       0.50, 0.30, 0.75, 0.40, 0.50),
    _q("Q4", "Before deciding, do you want to see the data behind a claim?",
       0.45, 0.30, 0.40, 0.75, 0.50),
    _q("Q5", "Do you prefer a steady weekly rhythm over frequent changes of plan?",
       0.30, 0.45, 0.50, 0.45, 0.75),
    _q("Q6", "Do you enjoy persuading others toward a direction you have chosen?",
       0.75, 0.45, 0.55, 0.30, 0.30),
    _q("Q7", "Do people come to you to talk through personal worries?",
       0.30, 0.75, 0.35, 0.35, 0.55),
    _q("Q8", "Does ticking items off a list give you energy?",
       0.45, 0.30, 0.75, 0.40, 0.55),
    _q("Q9", "Do you keep digging into a question after others have moved on?",
       0.50, 0.35, 0.30, 0.75, 0.40),
    _q("Q10", "When roles or rules are unclear, do you feel the need to write them down?",
       0.35, 0.40, 0.55, 0.50, 0.75),
    _q("Q11", "Do you often think about where your team should be in three years?",
       0.75, 0.40, 0.40, 0.55, 0.35),
    _q("Q12", "Do you change how you speak depending on who you are talking to?",
       0.50, 0.75, 0.40, 0.30, 0.45),
]

DEFAULT_BANK = QuestionBank(DEFAULT_QUESTIONS)
