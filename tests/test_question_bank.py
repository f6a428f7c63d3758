"""Tests for content/question_bank.py — question definitions."""

import numpy as np
import pytest

from typecoach.core.errors import UnknownQuestionError
from typecoach.core.model import TYPES
from typecoach.content.question_bank import DEFAULT_BANK, QuestionBank, TypeQuestion


def _yes(v):
    return {t: v for t in TYPES}


class TestDefaultBank:
    def test_twelve_questions(self):
        assert len(DEFAULT_BANK) == 12
        assert len({q.id for q in DEFAULT_BANK}) == 12

    def test_affinities_in_open_interval(self):
        for q in DEFAULT_BANK:
            assert ((q.yes_vector > 0) & (q.yes_vector < 1)).all(), q.id
            assert q.text

    def test_every_type_is_primary_somewhere(self):
        """Each type should be the strongest 'yes' on at least two questions."""
        counts = np.zeros(len(TYPES), dtype=int)
        for q in DEFAULT_BANK:
            counts[int(np.argmax(q.yes_vector))] += 1
        assert (counts >= 2).all()

    def test_lookup(self):
        assert DEFAULT_BANK.get("Q1").id == "Q1"
        assert "Q12" in DEFAULT_BANK
        assert "Q99" not in DEFAULT_BANK

    def test_unknown_id_raises(self):
        with pytest.raises(UnknownQuestionError):
            DEFAULT_BANK.get("Q99")
        with pytest.raises(KeyError):
            DEFAULT_BANK.get("nope")


class TestValidation:
    def test_affinity_out_of_range(self):
        with pytest.raises(ValueError):
            TypeQuestion(id="X", text="?", yes=_yes(1.0))
        with pytest.raises(ValueError):
            TypeQuestion(id="X", text="?", yes=_yes(0.0))

    def test_missing_type(self):
        yes = _yes(0.5)
        yes.pop(TYPES[0])
        with pytest.raises(ValueError):
            TypeQuestion(id="X", text="?", yes=yes)

    def test_duplicate_ids(self):
        q = TypeQuestion(id="X", text="?", yes=_yes(0.5))
        with pytest.raises(ValueError):
            QuestionBank([q, q])

    def test_yes_vector_read_only(self):
        q = DEFAULT_BANK.get("Q1")
        with pytest.raises(ValueError):
            q.yes_vector[0] = 0.1

    def test_empty_bank_rejected(self):
        """A bank with nothing to ask would leave a session stuck collecting."""
        with pytest.raises(ValueError):
            QuestionBank([])
        with pytest.raises(ValueError):
            QuestionBank(iter(()))
