"""Integration tests for core/session.py — the full question loop."""

import numpy as np
import pytest
from pydantic import ValidationError

from typecoach.core.errors import (
    DuplicateAnswerError,
    InvalidAnswerError,
    NothingToUndoError,
    SessionCompleteError,
    UnknownQuestionError,
)
from typecoach.core.model import TYPES
from typecoach.core.schemas import LoopConfig
from typecoach.core.session import (
    ClassificationSession,
    STATE_COLLECTING,
    STATE_DONE,
    STOP_EXHAUSTED,
    STOP_MAX_QUESTIONS,
    STOP_THRESHOLD,
)
from typecoach.content.question_bank import QuestionBank, TypeQuestion


def _bank(rows):
    return QuestionBank(
        TypeQuestion(id=qid, text=f"question {qid}", yes=dict(zip(TYPES, yes)))
        for qid, yes in rows
    )


@pytest.fixture
def strong_bank():
    """One near-decisive question per type."""
    rows = []
    for i, _ in enumerate(TYPES):
        yes = [0.01] * len(TYPES)
        yes[i] = 0.99
        rows.append((f"S{i + 1}", yes))
    return _bank(rows)


@pytest.fixture
def session():
    return ClassificationSession(context="work")


def _answer_selected(session, answers):
    """Answer whatever the session asks next, in order."""
    status = session.next_step()
    for a in answers:
        status = session.answer(status.question.id, a)
    return status


class TestSessionStart:
    def test_first_step_returns_question(self, session):
        status = session.next_step()
        assert status.done is False
        assert status.question is not None
        assert status.progress.asked == 0
        assert status.progress.max == 8
        assert status.hint.top_label == "Strategy Driver"

    def test_no_signals_gives_uniform_prior(self):
        """Null context and no traits still produce a valid prior and accept answers."""
        s = ClassificationSession()
        np.testing.assert_allclose(s.prior, np.full(5, 0.2))
        status = s.answer(s.next_step().question.id, "YES")
        assert sum(status.posterior.values()) == pytest.approx(1.0)

    def test_traits_bias_prior(self):
        s = ClassificationSession(traits=["Analytical", "Learner"])
        assert s.top_type()[0] == "TYPE_ANALYTICAL"

    def test_posterior_dict_keys_follow_types(self, session):
        d = session.posterior_dict()
        assert list(d) == TYPES
        assert all(isinstance(v, float) for v in d.values())
        assert sum(d.values()) == pytest.approx(1.0)


class TestStoppingPolicy:
    def test_done_at_max_questions(self, session):
        """Work context, max 3, threshold 0.9: three YES answers finish the loop."""
        session.update_loop(max_questions=3, threshold=0.9)
        status = session.next_step()
        for i in range(3):
            q = status.question
            assert q is not None
            status = session.answer(q.id, "YES")
            if i < 2:
                assert status.done is False
            else:
                assert status.done is True
                assert status.top.label
                assert len(status.next_steps) > 0
                assert sum(status.posterior.values()) == pytest.approx(1.0)
        assert session.state == STATE_DONE

    def test_min_questions_blocks_early_stop(self, session):
        """min 2, threshold 0.99, max 2: collecting after one answer, done after two."""
        session.update_loop(threshold=0.99, max_questions=2, min_questions=2)
        status = _answer_selected(session, ["YES"])
        assert status.done is False
        status = session.answer(status.question.id, "YES")
        assert status.done is True
        assert session.stop_reason == STOP_MAX_QUESTIONS

    def test_min_questions_overrides_reached_threshold(self, strong_bank):
        s = ClassificationSession(bank=strong_bank)
        s.update_loop(threshold=0.99, max_questions=4, min_questions=2)
        status = s.answer("S1", "YES")
        assert s.top_type()[1] >= 0.99
        assert status.done is False
        status = s.answer(status.question.id, "NO")
        assert status.done is True
        assert status.stop_reason == STOP_THRESHOLD

    def test_threshold_stop(self, strong_bank):
        s = ClassificationSession(bank=strong_bank)
        status = s.answer("S3", "YES")
        assert status.done is True
        assert status.top.id == "TYPE_EXECUTION"
        assert status.top.confidence >= 0.9

    def test_exhausted_bank_stops(self):
        weak = _bank([("W1", [0.5, 0.45, 0.55, 0.5, 0.5]), ("W2", [0.45, 0.5, 0.5, 0.55, 0.5])])
        s = ClassificationSession(bank=weak)
        s.update_loop(threshold=0.99, max_questions=12)
        status = s.answer("W1", "YES")
        assert status.done is False
        status = s.answer("W2", "YES")
        assert status.done is True
        assert status.stop_reason == STOP_EXHAUSTED

    def test_loop_change_applies_at_next_check(self, strong_bank):
        """Changing the threshold recomputes nothing; next_step applies it."""
        s = ClassificationSession(bank=strong_bank)
        s.update_loop(threshold=0.999)
        assert s.answer("S2", "YES").done is False
        before = s.posterior.copy()

        s.update_loop(threshold=0.99)
        np.testing.assert_array_equal(s.posterior, before)
        assert s.state == STATE_COLLECTING

        status = s.next_step()
        assert status.done is True
        assert status.top.id == "TYPE_EMPATHY"

    def test_next_step_needs_an_answer(self):
        s = ClassificationSession()
        s.update_loop(threshold=0.5, min_questions=0)
        assert s.next_step().done is False

    def test_answer_after_done_rejected(self, strong_bank):
        s = ClassificationSession(bank=strong_bank)
        s.answer("S1", "YES")
        with pytest.raises(SessionCompleteError):
            s.answer("S2", "NO")


class TestEvidence:
    def test_top_five_descending(self, session):
        session.update_loop(threshold=0.99, max_questions=6, min_questions=6)
        status = _answer_selected(session, ["YES", "NO", "PROB_YES", "YES", "PROB_NO", "NO"])
        assert status.done is True
        deltas = [e.delta for e in status.evidence]
        assert len(deltas) == 5
        assert deltas == sorted(deltas, reverse=True)
        all_deltas = sorted((r.delta for r in session.answers), reverse=True)
        assert deltas == pytest.approx(all_deltas[:5])

    def test_records_carry_question_text(self, session):
        status = session.next_step()
        session.answer(status.question.id, "YES")
        record = session.answers[0]
        assert record.text == status.question.text
        assert record.delta >= 0.0


class TestUndo:
    def test_undo_restores_posterior(self, session):
        """Answer then undo should restore the previous posterior exactly."""
        session.update_loop(threshold=0.99)
        _answer_selected(session, ["YES"])
        before = session.posterior.copy()
        asked = session.asked_count

        session.answer(session.next_step().question.id, "NO")
        session.undo()

        np.testing.assert_allclose(session.posterior, before, atol=1e-12)
        assert session.asked_count == asked

    def test_undo_after_done_resumes_collecting(self, session):
        session.update_loop(max_questions=3)
        status = _answer_selected(session, ["YES", "YES", "YES"])
        assert status.done is True

        status = session.undo()
        assert status.done is False
        assert status.progress.asked == 2
        assert status.question is not None
        assert session.state == STATE_COLLECTING
        assert session.stop_reason is None

    def test_undo_recomputes_deltas(self, session):
        """Retained deltas match a fresh session given the shorter history."""
        session.update_loop(threshold=0.99)
        _answer_selected(session, ["YES", "NO", "PROB_YES"])
        session.undo()

        fresh = ClassificationSession.replay(session.history(), context="work")
        assert [r.delta for r in session.answers] == pytest.approx([r.delta for r in fresh.answers])

    def test_undo_empty_raises(self, session):
        with pytest.raises(NothingToUndoError):
            session.undo()


class TestValidation:
    def test_invalid_answer(self, session):
        with pytest.raises(InvalidAnswerError):
            session.answer("Q1", "SOMETIMES")
        assert session.asked_count == 0

    def test_unknown_question(self, session):
        with pytest.raises(UnknownQuestionError):
            session.answer("Q404", "YES")
        assert session.asked_count == 0

    def test_duplicate_answer(self, session):
        session.answer("Q1", "YES")
        with pytest.raises(DuplicateAnswerError):
            session.answer("Q1", "NO")
        assert session.asked_count == 1

    def test_loop_bounds(self, session):
        with pytest.raises(ValidationError):
            session.update_loop(threshold=1.0)
        with pytest.raises(ValidationError):
            session.update_loop(threshold=0.4)
        with pytest.raises(ValidationError):
            session.update_loop(max_questions=13)
        with pytest.raises(ValidationError):
            session.update_loop(min_questions=11)
        assert session.loop == LoopConfig()

    def test_min_above_max_rejected(self, session):
        session.update_loop(max_questions=3)
        with pytest.raises(ValidationError):
            session.update_loop(min_questions=5)
        assert session.loop.min_questions == 0
        assert session.loop.max_questions == 3


class TestReplay:
    def test_replay_matches_live_session(self, session):
        session.update_loop(threshold=0.99)
        _answer_selected(session, ["YES", "PROB_NO"])
        replayed = ClassificationSession.replay(session.history(), context="work")
        np.testing.assert_allclose(replayed.posterior, session.posterior)
        assert replayed.asked_count == 2

    def test_replay_runs_stop_check(self, strong_bank):
        s = ClassificationSession.replay([("S4", "YES")], bank=strong_bank)
        assert s.is_done
        assert s.status().top.id == "TYPE_ANALYTICAL"

    def test_replay_rejects_bad_history(self):
        with pytest.raises(UnknownQuestionError):
            ClassificationSession.replay([("Q1", "YES"), ("nope", "NO")])
