"""
ClassificationSession: one respondent's run through the question loop.

Lifecycle:
    collecting → done

The answer log is the source of truth. The posterior and every
per-answer delta are recomputed from the prior after each answer and
each undo, so undo never needs an inverse update.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

import numpy as np

from .errors import DuplicateAnswerError, NothingToUndoError, SessionCompleteError
from .inference import pick_next_question, update_posterior
from .model import TYPES, type_label, validate_answer
from .prior import apply_demographic_bias, build_prior
from .schemas import (
    AnswerRecord,
    Hint,
    LoopConfig,
    LoopStatus,
    Progress,
    QuestionData,
    TopType,
)
from .utils import argmax_index, to_mapping
from ..content.question_bank import DEFAULT_BANK, QuestionBank
from ..content.recommendations import next_steps_for_type
from ..content.strengths import STRENGTH_TO_TYPE

logger = logging.getLogger(__name__)

# State constants
STATE_COLLECTING = "collecting"
STATE_DONE = "done"

# Stop reasons
STOP_THRESHOLD = "threshold"
STOP_MAX_QUESTIONS = "max_questions"
STOP_EXHAUSTED = "exhausted"

EVIDENCE_LIMIT = 5


class ClassificationSession:
    """
    Sequential Bayesian type classifier for a single session.

    Usage:
        session = ClassificationSession(context="work", traits=["Strategic"])
        status = session.next_step()            # first question
        status = session.answer("Q1", "YES")    # update + stop check
        status = session.undo()                 # back to collecting

    Not thread-safe: callers serialize answer/undo/update_loop per session.
    """

    def __init__(
        self,
        bank: QuestionBank = DEFAULT_BANK,
        context: Optional[str] = None,
        traits: Optional[Sequence[str]] = None,
        trait_to_type: Optional[Mapping[str, str]] = None,
        demographics: Optional[Mapping[str, str]] = None,
        loop: Optional[LoopConfig] = None,
    ):
        self.bank = bank
        self.context = context
        self.traits: List[str] = list(traits or [])
        self.trait_to_type = STRENGTH_TO_TYPE if trait_to_type is None else trait_to_type
        self.loop: LoopConfig = loop or LoopConfig()

        prior = build_prior(context, self.traits, self.trait_to_type)
        self.prior: np.ndarray = apply_demographic_bias(prior, demographics)

        self.answers: List[AnswerRecord] = []
        self.posterior: np.ndarray = self.prior.copy()
        self.state: str = STATE_COLLECTING
        self.stop_reason: Optional[str] = None

    @classmethod
    def replay(
        cls,
        history: Iterable[Tuple[str, str]],
        **kwargs: Any,
    ) -> "ClassificationSession":
        """
        Rebuild a session from a persisted (question_id, answer) history.

        The stop check runs once, after the whole history is applied.
        """
        session = cls(**kwargs)
        for question_id, answer in history:
            session._append(question_id, answer)
        session._recompute()
        if session.answers:
            session._check_stop()
        return session

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def asked_count(self) -> int:
        return len(self.answers)

    @property
    def answered_ids(self) -> Set[str]:
        return {r.question_id for r in self.answers}

    @property
    def is_done(self) -> bool:
        return self.state == STATE_DONE

    def top_type(self) -> Tuple[str, float]:
        """Leading type and its probability (first in type order on ties)."""
        idx = argmax_index(self.posterior)
        return TYPES[idx], float(self.posterior[idx])

    def posterior_dict(self) -> Dict[str, float]:
        return to_mapping(self.posterior, TYPES)

    def evidence(self, limit: int = EVIDENCE_LIMIT) -> List[AnswerRecord]:
        """Answer records with the largest entropy deltas, descending."""
        ranked = sorted(self.answers, key=lambda r: r.delta, reverse=True)
        return [r.model_copy() for r in ranked[:limit]]

    def history(self) -> List[Tuple[str, str]]:
        """The (question_id, answer) log, suitable for ``replay``."""
        return [(r.question_id, r.answer) for r in self.answers]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def answer(self, question_id: str, answer: str) -> LoopStatus:
        """
        Record an answer, recompute the posterior and run the stop check.

        Raises:
            SessionCompleteError: the session is already done
            InvalidAnswerError: unknown answer level
            UnknownQuestionError: question id not in the bank
            DuplicateAnswerError: question already answered
        """
        if self.is_done:
            raise SessionCompleteError("Session is done; undo before answering again")

        self._append(question_id, answer)
        self._recompute()
        logger.debug(
            f"[Session] {question_id}={answer} -> asked={self.asked_count}, "
            f"delta={self.answers[-1].delta:.4f}"
        )

        if self._check_stop():
            return self._done_status()
        return self._collecting_status()

    def undo(self) -> LoopStatus:
        """Drop the last answer, replay the remaining history, resume collecting."""
        if not self.answers:
            raise NothingToUndoError("No answer to undo")

        removed = self.answers.pop()
        self._recompute()
        self.state = STATE_COLLECTING
        self.stop_reason = None
        logger.debug(f"[Session] Undo {removed.question_id} -> asked={self.asked_count}")
        return self._collecting_status()

    def update_loop(
        self,
        threshold: Optional[float] = None,
        max_questions: Optional[int] = None,
        min_questions: Optional[int] = None,
    ) -> LoopConfig:
        """
        Change loop parameters; the whole config is revalidated.

        Takes effect at the next stop check; nothing is recomputed here.

        Raises:
            pydantic.ValidationError: a value is out of range, or min > max
        """
        merged = self.loop.model_dump()
        for key, value in (
            ("threshold", threshold),
            ("max_questions", max_questions),
            ("min_questions", min_questions),
        ):
            if value is not None:
                merged[key] = value
        self.loop = LoopConfig(**merged)
        logger.debug(f"[Session] Loop config updated: {self.loop.model_dump()}")
        return self.loop

    def next_step(self) -> LoopStatus:
        """
        Stop check under the current loop config, then the next question.

        At least one answer is required before the loop can finish.
        """
        if self.is_done:
            return self._done_status()
        if self.answers and self._check_stop():
            return self._done_status()
        return self._collecting_status()

    def status(self) -> LoopStatus:
        """Current payload without running the stop check."""
        if self.is_done:
            return self._done_status()
        return self._collecting_status()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _append(self, question_id: str, answer: str) -> None:
        validate_answer(answer)
        question = self.bank.get(question_id)
        if question_id in self.answered_ids:
            raise DuplicateAnswerError(question_id)
        self.answers.append(
            AnswerRecord(question_id=question_id, answer=answer, text=question.text)
        )

    def _recompute(self) -> None:
        """Replay the full log from the prior and refresh every delta."""
        answered = [(self.bank.get(r.question_id), r.answer) for r in self.answers]
        posterior, deltas = update_posterior(self.prior, answered)
        self.posterior = posterior
        for record, delta in zip(self.answers, deltas):
            record.delta = delta

    def _check_stop(self) -> bool:
        """Apply the stopping policy; moves to ``done`` when it fires."""
        top, confidence = self.top_type()
        asked = self.asked_count
        must_continue = asked < self.loop.min_questions

        reason = None
        if not must_continue:
            if confidence >= self.loop.threshold:
                reason = STOP_THRESHOLD
            elif asked >= self.loop.max_questions:
                reason = STOP_MAX_QUESTIONS
        if reason is None and len(self.answered_ids) >= len(self.bank):
            reason = STOP_EXHAUSTED

        if reason is None:
            return False

        self.state = STATE_DONE
        self.stop_reason = reason
        logger.info(
            f"[Session] Done after {asked} questions: {top} "
            f"(confidence={confidence:.3f}, reason={reason})"
        )
        return True

    def _progress(self) -> Progress:
        return Progress(asked=self.asked_count, max=self.loop.max_questions)

    def _collecting_status(self) -> LoopStatus:
        question, _gain = pick_next_question(self.posterior, self.bank, self.answered_ids)
        top, confidence = self.top_type()
        return LoopStatus(
            done=False,
            posterior=self.posterior_dict(),
            progress=self._progress(),
            question=QuestionData(**question.to_dict()) if question is not None else None,
            hint=Hint(top_label=type_label(top), confidence=confidence),
        )

    def _done_status(self) -> LoopStatus:
        top, confidence = self.top_type()
        return LoopStatus(
            done=True,
            posterior=self.posterior_dict(),
            progress=self._progress(),
            top=TopType(id=top, label=type_label(top), confidence=confidence),
            next_steps=next_steps_for_type(top),
            evidence=self.evidence(),
            stop_reason=self.stop_reason,
        )
